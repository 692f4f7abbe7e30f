from django.urls import path, include
from rest_framework.routers import SimpleRouter
from . import views

app_name = 'items'

router = SimpleRouter()
router.register(r'', views.ItemViewSet, basename='item')

urlpatterns = [
    # GET    /api/items/{id}/   - Get item
    # PATCH  /api/items/{id}/   - Update item
    path('', include(router.urls)),
]
