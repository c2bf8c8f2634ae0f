from rest_framework import serializers

from .validators import SHIPPING_FIELDS, clean_shipping_value

PAYMENT_METHODS = {
    "cod": {"label": "Cash on Delivery", "enabled": True},
    "card": {"label": "Credit/Debit Card", "enabled": False},
}


class ShippingInfoSerializer(serializers.Serializer):
    """
    Input filtering for the shipping form. Completeness is checked by
    CheckoutFlow.validate so a half-filled form can still be saved.
    """

    first_name = serializers.CharField(required=False, allow_blank=True, default="")
    last_name = serializers.CharField(required=False, allow_blank=True, default="")
    email = serializers.CharField(required=False, allow_blank=True, default="")
    phone = serializers.CharField(required=False, allow_blank=True, default="")
    address = serializers.CharField(required=False, allow_blank=True, default="")
    city = serializers.CharField(required=False, allow_blank=True, default="")
    province = serializers.CharField(required=False, allow_blank=True, default="")
    zip_code = serializers.CharField(required=False, allow_blank=True, default="")

    def to_internal_value(self, data):
        attrs = super().to_internal_value(data)
        return {field: clean_shipping_value(field, attrs.get(field, "")) for field in SHIPPING_FIELDS}


class PaymentMethodSerializer(serializers.Serializer):
    payment_method = serializers.ChoiceField(choices=tuple(PAYMENT_METHODS))

    def validate_payment_method(self, value):
        if not PAYMENT_METHODS[value]["enabled"]:
            raise serializers.ValidationError(f"{PAYMENT_METHODS[value]['label']} is not available yet")
        return value


class CheckoutLoginSerializer(serializers.Serializer):
    email = serializers.CharField()
    password = serializers.CharField(write_only=True)


class CheckoutRegisterSerializer(serializers.Serializer):
    name = serializers.CharField()
    email = serializers.CharField()
    password = serializers.CharField(write_only=True)
    confirm_password = serializers.CharField(write_only=True)
