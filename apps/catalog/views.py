from rest_framework import viewsets, status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from .models import ServiceDefinition, Package
from .serializers import (
    ServiceDefinitionSerializer,
    ServiceDefinitionCreateSerializer,
    ServiceDefinitionUpdateSerializer,
    PackageSerializer,
    PackageInputSerializer,
)
from .services import (
    get_service_config,
    create_service_definition,
    update_service_definition,
    delete_service_definition,
    create_package,
    update_package,
    delete_package,
    # Exceptions
    ServiceNotFoundError,
    DuplicateServiceError,
    InvalidServiceDefinitionError,
    InvalidServiceSelectionError,
    PackageNotFoundError,
    DuplicatePackageError,
    InvalidPackageError,
)


def selection_error_response(error: InvalidServiceSelectionError) -> Response:
    """400 response listing every offending service id."""
    return Response(
        {'error': str(error), 'services': error.errors},
        status=status.HTTP_400_BAD_REQUEST
    )


class ServiceDefinitionViewSet(viewsets.ModelViewSet):
    """
    ViewSet for the venue's service definitions.

    list: All services, ordered by category and position
    create: Add a service to a category
    retrieve: Get a service
    update / partial_update: Edit a service
    destroy: Remove a service (stored bookings keep their values)
    """

    queryset = ServiceDefinition.objects.all()
    serializer_class = ServiceDefinitionSerializer
    permission_classes = [IsAuthenticated]

    def get_queryset(self):
        queryset = super().get_queryset()
        category = self.request.query_params.get('category')
        if category:
            queryset = queryset.filter(category=category)
        return queryset

    def create(self, request, *args, **kwargs):
        """Add a service."""
        serializer = ServiceDefinitionCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            definition = create_service_definition(
                service_id=data['id'],
                category=data['category'],
                name=data['name'],
                type=data['type'],
                min_value=data.get('min_value'),
                max_value=data.get('max_value'),
                options=data.get('options'),
            )
        except (DuplicateServiceError, InvalidServiceDefinitionError) as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(
            ServiceDefinitionSerializer(definition).data,
            status=status.HTTP_201_CREATED
        )

    def update(self, request, *args, **kwargs):
        """Edit a service. PUT and PATCH both accept partial data."""
        serializer = ServiceDefinitionUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            definition = update_service_definition(
                service_id=kwargs['pk'],
                **serializer.validated_data
            )
        except ServiceNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InvalidServiceDefinitionError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(ServiceDefinitionSerializer(definition).data)

    def destroy(self, request, *args, **kwargs):
        """Remove a service."""
        try:
            delete_service_definition(service_id=kwargs['pk'])
        except ServiceNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(status=status.HTTP_204_NO_CONTENT)


class PackageViewSet(viewsets.ModelViewSet):
    """
    ViewSet for packages (priced booking templates).
    """

    queryset = Package.objects.all()
    serializer_class = PackageSerializer
    permission_classes = [IsAuthenticated]

    def create(self, request, *args, **kwargs):
        """Create a package."""
        serializer = PackageInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            package = create_package(**serializer.validated_data)
        except InvalidServiceSelectionError as e:
            return selection_error_response(e)
        except (DuplicatePackageError, InvalidPackageError) as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(PackageSerializer(package).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        """Edit a package."""
        partial = kwargs.pop('partial', False)
        serializer = PackageInputSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        try:
            package = update_package(package_id=kwargs['pk'], **serializer.validated_data)
        except PackageNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InvalidServiceSelectionError as e:
            return selection_error_response(e)
        except (DuplicatePackageError, InvalidPackageError) as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(PackageSerializer(package).data)

    def destroy(self, request, *args, **kwargs):
        """Delete a package."""
        try:
            delete_package(package_id=kwargs['pk'])
        except PackageNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(status=status.HTTP_204_NO_CONTENT)


@extend_schema(
    summary="Get service configuration",
    description="All services grouped by category. Every category is present, even when empty."
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def service_config(request):
    """Get the service configuration grouped by category."""
    return Response(get_service_config())
