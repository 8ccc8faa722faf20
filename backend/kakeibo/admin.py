from django import forms
from django.contrib import admin
from django.utils import timezone

from .categories import category_choices
from .models import Transaction


class DeletedFilter(admin.SimpleListFilter):
    title = "deleted"
    parameter_name = "deleted"

    def lookups(self, request, model_admin):
        return [("no", "Active"), ("yes", "Deleted")]

    def queryset(self, request, queryset):
        if self.value() == "no":
            return queryset.filter(deleted_at__isnull=True)
        if self.value() == "yes":
            return queryset.filter(deleted_at__isnull=False)
        return queryset


@admin.register(Transaction)
class TransactionAdmin(admin.ModelAdmin):
    list_display = ("date", "type", "category", "amount", "memo", "deleted_at")
    list_filter = ("type", DeletedFilter, "category")
    search_fields = ("memo", "category")
    date_hierarchy = "date"
    actions = ["restore"]

    def formfield_for_dbfield(self, db_field, request, **kwargs):
        if db_field.name == "category":
            kwargs["widget"] = forms.Select(choices=category_choices())
        return super().formfield_for_dbfield(db_field, request, **kwargs)

    def get_queryset(self, request):
        return Transaction.all_objects.all()

    def delete_queryset(self, request, queryset):
        now = timezone.now()
        queryset.filter(deleted_at__isnull=True).update(deleted_at=now, updated_at=now)

    @admin.action(description="Restore selected transactions")
    def restore(self, request, queryset):
        updated = queryset.filter(deleted_at__isnull=False).update(deleted_at=None, updated_at=timezone.now())
        self.message_user(request, f"Restored {updated} transaction(s).")
