from django.urls import path

from .views import (
    ForwarderInquiryDetailView,
    ForwarderInquiryRejectView,
    ShipperInquiryCancelView,
    ShipperInquiryDetailView,
)

urlpatterns = [
    path('forwarder/inquiries/<int:id>/', ForwarderInquiryDetailView.as_view(), name='forwarder-inquiry-detail'),
    path('forwarder/inquiries/<int:id>/reject/', ForwarderInquiryRejectView.as_view(), name='forwarder-inquiry-reject'),
    path('shipper/inquiries/<int:id>/', ShipperInquiryDetailView.as_view(), name='shipper-inquiry-detail'),
    path('shipper/inquiries/<int:id>/cancel/', ShipperInquiryCancelView.as_view(), name='shipper-inquiry-cancel'),
]
