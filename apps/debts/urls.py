from django.urls import path, include
from rest_framework.routers import SimpleRouter
from . import views

app_name = 'debts'

router = SimpleRouter()
router.register(r'', views.DebtViewSet, basename='debt')

urlpatterns = [
    # Debt ViewSet routes
    # GET    /api/debts/              - List debts in user's lists
    # GET    /api/debts/{id}/         - Get debt details
    # POST   /api/debts/{id}/settle/  - Mark debt as settled

    # Additional endpoints
    path('my/', views.my_debts, name='my-debts'),

    # Include router URLs
    path('', include(router.urls)),
]
