from rest_framework import serializers
from .models import ServiceDefinition, ServiceCategory, ServiceType, Package


class ServiceDefinitionSerializer(serializers.ModelSerializer):
    """Serializer for service definitions."""

    class Meta:
        model = ServiceDefinition
        fields = [
            'id',
            'category',
            'name',
            'type',
            'min_value',
            'max_value',
            'options',
            'position',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['position', 'created_at', 'updated_at']


class ServiceDefinitionCreateSerializer(serializers.Serializer):
    """Input serializer for adding a service."""

    id = serializers.SlugField(max_length=64)
    category = serializers.ChoiceField(choices=ServiceCategory.choices)
    name = serializers.CharField(max_length=100)
    type = serializers.ChoiceField(choices=ServiceType.choices)
    min_value = serializers.IntegerField(required=False, allow_null=True)
    max_value = serializers.IntegerField(required=False, allow_null=True)
    options = serializers.ListField(
        child=serializers.CharField(max_length=100),
        required=False,
        default=list
    )


class ServiceDefinitionUpdateSerializer(serializers.Serializer):
    """Input serializer for editing a service. All fields optional."""

    category = serializers.ChoiceField(choices=ServiceCategory.choices, required=False)
    name = serializers.CharField(max_length=100, required=False)
    type = serializers.ChoiceField(choices=ServiceType.choices, required=False)
    min_value = serializers.IntegerField(required=False, allow_null=True)
    max_value = serializers.IntegerField(required=False, allow_null=True)
    options = serializers.ListField(
        child=serializers.CharField(max_length=100),
        required=False
    )


class PackageSerializer(serializers.ModelSerializer):
    """Serializer for packages."""

    class Meta:
        model = Package
        fields = [
            'id',
            'name',
            'price',
            'services',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']


class PackageInputSerializer(serializers.Serializer):
    """Input serializer for creating and editing packages."""

    name = serializers.CharField(max_length=100)
    price = serializers.DecimalField(max_digits=12, decimal_places=2)
    services = serializers.DictField(required=False, default=dict)
