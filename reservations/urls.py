from django.urls import include, path
from rest_framework.routers import DefaultRouter

from . import views

# ==============================================================================
# DRF ROUTER
# ==============================================================================
router = DefaultRouter()
router.register(r'restaurants/(?P<restaurant_id>\d+)/tables', views.TableViewSet, basename='table')
router.register(r'restaurants/(?P<restaurant_id>\d+)/reservations', views.ReservationViewSet, basename='reservation')

# ==============================================================================
# URL PATTERNS
# ==============================================================================
app_name = 'reservations'

urlpatterns = [
    path('api/v1/', include(router.urls)),
]
