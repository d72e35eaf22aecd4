from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'bookings'

# Router for ViewSets
router = DefaultRouter()
router.register(r'', views.BookingViewSet, basename='booking')

urlpatterns = [
    # Booking ViewSet routes
    # GET    /api/bookings/                       - List bookings (filters)
    # POST   /api/bookings/                       - Create booking
    # GET    /api/bookings/{id}/                  - Booking details
    # PATCH  /api/bookings/{id}/                  - Edit upcoming booking

    # Custom booking actions
    # GET    /api/bookings/{id}/payments/         - List payments
    # POST   /api/bookings/{id}/payments/         - Record payment
    # POST   /api/bookings/{id}/revert_payment/   - Revert a payment
    # POST   /api/bookings/{id}/cancel/           - Cancel with optional refund
    # POST   /api/bookings/{id}/complete/         - Mark completed
    # GET    /api/bookings/{id}/summary/          - Financial summary
    # GET    /api/bookings/{id}/proforma/         - Printable proforma
    # GET    /api/bookings/next-id/               - Next booking id (?season=)
    # GET    /api/bookings/report/                - Bookings report (?export=csv|pdf)

    path('', include(router.urls)),
]
