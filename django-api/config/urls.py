from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/", include("events.urls")),
    path("api/", include("venues.urls")),
    path("api/", include("payments.urls")),
    path("api/", include("subscriptions.urls")),
]
