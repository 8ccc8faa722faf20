from .transaction import TransactionForm, bind_update, form_error_message

__all__ = ["TransactionForm", "bind_update", "form_error_message"]
