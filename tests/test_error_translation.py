from dashboard.actions import transform_errors
from dashboard.schemas import CreateInvoice, ValidationIssue, safe_parse


def test_messages_accumulate_per_field_in_order():
    issues = [
        ValidationIssue(path=("amount",), message="A"),
        ValidationIssue(path=("status",), message="S"),
        ValidationIssue(path=("amount",), message="B"),
    ]
    assert transform_errors(issues) == {"amount": ["A", "B"], "status": ["S"]}


def test_issues_without_a_field_name_are_dropped():
    issues = [
        ValidationIssue(path=(), message="form level"),
        ValidationIssue(path=("",), message="blank"),
        ValidationIssue(path=(0,), message="index"),
        ValidationIssue(path=("customer_id",), message="C"),
    ]
    assert transform_errors(issues) == {"customer_id": ["C"]}


def test_only_first_path_element_is_used():
    issues = [ValidationIssue(path=("lines", 2, "amount"), message="nested")]
    assert transform_errors(issues) == {"lines": ["nested"]}


def test_empty_issue_list():
    assert transform_errors([]) == {}


def test_translates_schema_issues():
    result = safe_parse(
        CreateInvoice, {"customer_id": "c1", "amount": "0", "status": "pending"}
    )
    assert transform_errors(result.issues) == {
        "amount": ["Please enter an amount greater than $0."]
    }
