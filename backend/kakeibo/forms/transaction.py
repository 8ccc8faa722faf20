import datetime

from django import forms
from django.forms.forms import NON_FIELD_ERRORS

from kakeibo.categories import category_choices
from kakeibo.models import Transaction

EDITABLE_FIELDS = ["date", "type", "category", "amount", "memo"]


class IsoDateTimeField(forms.DateTimeField):
    """Accepts ISO 8601 datetimes or YYYY-MM-DD; JSON numbers and objects are invalid."""

    def to_python(self, value):
        if value not in self.empty_values and not isinstance(value, (str, datetime.date)):
            raise forms.ValidationError(self.error_messages["invalid"], code="invalid")
        return super().to_python(value)


class WholeNumberField(forms.IntegerField):
    """Rejects JSON floats and booleans such as 5.0 or true; digit strings are fine."""

    def to_python(self, value):
        if isinstance(value, (bool, float)):
            raise forms.ValidationError(self.error_messages["invalid"], code="invalid")
        return super().to_python(value)


class TransactionForm(forms.ModelForm):
    """
    Boundary validation for create/update. Field rules come from the model;
    the type/category pairing is checked by Transaction.clean() and surfaces
    as a non-field error.
    """

    class Meta:
        model = Transaction
        fields = EDITABLE_FIELDS
        field_classes = {"date": IsoDateTimeField, "amount": WholeNumberField}
        widgets = {
            "category": forms.Select(choices=category_choices()),
            "memo": forms.Textarea(attrs={"rows": 2}),
        }


def _stored_value(instance, field):
    value = getattr(instance, field)
    if field == "date" and value is not None:
        return value.isoformat()
    return value


def bind_update(instance, payload):
    """
    Bind a partial update: fields present in `payload` replace the stored values,
    omitted fields keep them, and the merged record is validated as a whole.
    """
    data = {field: _stored_value(instance, field) for field in EDITABLE_FIELDS}
    present = [field for field in EDITABLE_FIELDS if field in payload]
    for field in present:
        data[field] = payload[field]
    form = TransactionForm(data, instance=instance)
    form.present_fields = present
    return form


def form_error_message(form) -> str:
    messages = list(form.non_field_errors())
    for field, errors in form.errors.items():
        if field == NON_FIELD_ERRORS:
            continue
        messages.extend(f"{field}: {error}" for error in errors)
    return "; ".join(messages)
