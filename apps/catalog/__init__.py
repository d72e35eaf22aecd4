"""
Catalog App - Venue Service Configuration and Packages

This app holds the configuration metadata a booking is built from: the
service definitions offered by the venue (grouped into fixed categories)
and the packages that prefill a new booking's rate and services.

Key Features:
- Typed service definitions (checkbox, number with bounds, dropdown)
- Schema validation for a booking's or package's services map
- Package templates applied to new bookings
- Default venue configuration installer

Architecture:
- Models: ServiceDefinition, Package
- Services: service_config, package_management
- Views: RESTful API with ViewSets
"""
