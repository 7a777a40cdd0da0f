from django.urls import include, path

urlpatterns = [
    path("", include("modules.core.urls")),
    # Domain modules
    path("", include("modules.products.urls")),
    path("", include("modules.users.urls")),
    path("", include("modules.orders.urls")),
]

handler404 = "modules.core.views.not_found"
