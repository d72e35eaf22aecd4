from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'catalog'

router = DefaultRouter()
router.register(r'services', views.ServiceDefinitionViewSet, basename='service')
router.register(r'packages', views.PackageViewSet, basename='package')

urlpatterns = [
    # Service routes
    # GET    /api/catalog/services/          - List services (?category=)
    # POST   /api/catalog/services/          - Add service
    # GET    /api/catalog/services/{id}/     - Get service
    # PATCH  /api/catalog/services/{id}/     - Edit service
    # DELETE /api/catalog/services/{id}/     - Remove service

    # Package routes
    # GET    /api/catalog/packages/          - List packages
    # POST   /api/catalog/packages/          - Create package
    # PATCH  /api/catalog/packages/{id}/     - Edit package
    # DELETE /api/catalog/packages/{id}/     - Delete package

    path('service-config/', views.service_config, name='service-config'),

    path('', include(router.urls)),
]
