from django.contrib import admin
from apps.catalog.models import ServiceDefinition, Package


@admin.register(ServiceDefinition)
class ServiceDefinitionAdmin(admin.ModelAdmin):
    """Admin interface for service definitions."""

    list_display = ['id', 'name', 'category', 'type', 'min_value', 'max_value', 'position']
    list_filter = ['category', 'type']
    search_fields = ['id', 'name']
    ordering = ['category', 'position']


@admin.register(Package)
class PackageAdmin(admin.ModelAdmin):
    """Admin interface for packages."""

    list_display = ['name', 'price', 'updated_at']
    search_fields = ['name']
    readonly_fields = ['created_at', 'updated_at']
