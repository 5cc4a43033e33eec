# accounting/api/voucher_urls.py

from django.urls import include, path
from rest_framework.routers import SimpleRouter

from accounting.api.views.vouchers import VoucherViewSet

router = SimpleRouter()
router.register("", VoucherViewSet, basename="voucher")

urlpatterns = [
    path("", include(router.urls)),
]
