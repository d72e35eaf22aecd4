from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'expenses'

# Note: categories and vendors must be registered BEFORE the empty prefix
router = DefaultRouter()
router.register(r'categories', views.ExpenseCategoryViewSet, basename='category')
router.register(r'vendors', views.VendorViewSet, basename='vendor')
router.register(r'', views.ExpenseViewSet, basename='expense')

urlpatterns = [
    # Expense routes
    # GET    /api/expenses/                 - List expenses (filters)
    # POST   /api/expenses/                 - Record expense
    # GET    /api/expenses/{id}/            - Get expense
    # POST   /api/expenses/{id}/revert/     - Revert expense

    # Category routes
    # GET    /api/expenses/categories/      - List categories
    # POST   /api/expenses/categories/      - Create category
    # PATCH  /api/expenses/categories/{id}/ - Edit category
    # DELETE /api/expenses/categories/{id}/ - Delete category and its vendors

    # Vendor routes
    # GET    /api/expenses/vendors/         - List vendors (?category=)
    # POST   /api/expenses/vendors/         - Create vendor
    # PATCH  /api/expenses/vendors/{id}/    - Edit vendor
    # DELETE /api/expenses/vendors/{id}/    - Delete vendor

    path('', include(router.urls)),
]
