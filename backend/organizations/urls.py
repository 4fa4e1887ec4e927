from django.urls import path

from .views import ForwarderConnectionAcceptView, ShipperConnectionInviteView

urlpatterns = [
    path('shipper/connections/', ShipperConnectionInviteView.as_view(), name='shipper-connection-invite'),
    path('forwarder/connections/<int:id>/accept/', ForwarderConnectionAcceptView.as_view(), name='forwarder-connection-accept'),
]
