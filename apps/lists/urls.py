from django.urls import path, include
from rest_framework.routers import SimpleRouter
from . import views

app_name = 'lists'

# Router for ViewSets
router = SimpleRouter()
router.register(r'', views.ShoppingListViewSet, basename='list')

urlpatterns = [
    # List ViewSet routes
    # GET    /api/lists/                        - List user's lists
    # POST   /api/lists/                        - Create list
    # GET    /api/lists/{id}/                   - Get list details

    # Custom list actions
    # GET    /api/lists/code/{code}/            - Look up list by join code
    # POST   /api/lists/join/{code}/            - Join with join code
    # GET    /api/lists/{id}/members/           - List members
    # GET    /api/lists/{id}/items/             - List items
    # POST   /api/lists/{id}/items/             - Add item
    # GET    /api/lists/{id}/debts/             - List recorded debts
    # POST   /api/lists/{id}/calculate_debts/   - Compute and record debts
    # GET    /api/lists/{id}/totals/            - Per-payer totals

    # Include router URLs
    path('', include(router.urls)),
]
