from django.urls import path

from kakeibo import views

app_name = "kakeibo"

urlpatterns = [
    path("", views.dashboard, name="dashboard"),
    path("list", views.transaction_list, name="transaction-list"),
    path("transactions", views.transaction_collection, name="transaction-collection"),
    path("transactions/<int:pk>", views.transaction_detail, name="transaction-detail"),
]
