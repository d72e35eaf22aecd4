from django.urls import path
from . import views

app_name = 'ledger'

urlpatterns = [
    path('transactions/', views.transactions, name='transactions'),

    # Running-balance ledgers
    path('daybook/', views.daybook, name='daybook'),
    path('cashbook/', views.cashbook, name='cashbook'),
    path('bankbook/', views.bankbook, name='bankbook'),

    # Expense sub-ledger
    path('category-vendor/', views.category_vendor, name='category-vendor'),
]
