# tests/application/test_outcome.py
import pytest
from application.outcome import CheckoutHandlerResult
from domain.checkout import CheckoutWorkflowError
from domain.routes import redirect_to_checkout


class TestCheckoutHandlerResult:
    def test_create_success_result(self):
        result = CheckoutHandlerResult(success=True)
        assert result.success is True
        assert result.skip_page is False
        assert result.action_result is None
        assert result.errors == []

    def test_create_failure_with_errors(self):
        errors = [CheckoutWorkflowError("Email", "Email is required")]
        result = CheckoutHandlerResult(success=False, errors=errors)
        assert result.success is False
        assert result.errors[0].key == "Email"

    def test_create_skip_with_target(self):
        target = redirect_to_checkout("Confirm")
        result = CheckoutHandlerResult(success=True, skip_page=True, action_result=target)
        assert result.skip_page is True
        assert result.action_result == target

    def test_result_frozen(self):
        result = CheckoutHandlerResult(success=True)
        with pytest.raises(Exception):  # FrozenInstanceError
            result.success = False
