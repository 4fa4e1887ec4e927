from django.urls import path

from .views import SubscriptionUsageView

urlpatterns = [
    path('usage/', SubscriptionUsageView.as_view(), name='billing-usage'),
]
