from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/', include('organizations.urls')),
    path('api/', include('inquiries.urls')),
    path('api/', include('quotes.urls')),
    path('api/billing/', include('billing.urls')),
]
