from django.urls import path

from .views import (
    ForwarderQuotationDetailView,
    ForwarderQuotationSaveView,
    ForwarderQuotationWithdrawView,
    ShipperQuotationAcceptView,
    ShipperQuotationRejectView,
)

urlpatterns = [
    path('forwarder/inquiries/<int:id>/quotations/', ForwarderQuotationSaveView.as_view(), name='forwarder-quotation-save'),
    path('forwarder/quotations/<int:id>/', ForwarderQuotationDetailView.as_view(), name='forwarder-quotation-detail'),
    path('forwarder/quotations/<int:id>/withdraw/', ForwarderQuotationWithdrawView.as_view(), name='forwarder-quotation-withdraw'),
    path('shipper/quotations/<int:id>/accept/', ShipperQuotationAcceptView.as_view(), name='shipper-quotation-accept'),
    path('shipper/quotations/<int:id>/reject/', ShipperQuotationRejectView.as_view(), name='shipper-quotation-reject'),
]
