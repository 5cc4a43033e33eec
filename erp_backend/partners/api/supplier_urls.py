# partners/api/supplier_urls.py

from django.urls import include, path
from rest_framework.routers import SimpleRouter

from partners.api.views import SupplierViewSet

router = SimpleRouter()
router.register("", SupplierViewSet, basename="supplier")

urlpatterns = [
    path("", include(router.urls)),
]
