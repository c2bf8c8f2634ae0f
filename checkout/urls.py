from django.urls import path

from .views import (
    CheckoutLoginView,
    CheckoutModeView,
    CheckoutRegisterView,
    CheckoutShippingView,
    CheckoutSubmitView,
    CheckoutView,
)

urlpatterns = [
    path("", CheckoutView.as_view(), name="checkout"),
    path("mode/", CheckoutModeView.as_view(), name="checkout-mode"),
    path("login/", CheckoutLoginView.as_view(), name="checkout-login"),
    path("register/", CheckoutRegisterView.as_view(), name="checkout-register"),
    path("shipping/", CheckoutShippingView.as_view(), name="checkout-shipping"),
    path("submit/", CheckoutSubmitView.as_view(), name="checkout-submit"),
]
