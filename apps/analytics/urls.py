from django.urls import path
from . import views

app_name = 'analytics'

urlpatterns = [
    # Dashboard
    path('season/', views.season, name='season'),

    # Venue-wide analytics
    path('summary/', views.summary, name='summary'),
    path('seasons/', views.seasons, name='seasons'),
]
