from rest_framework import serializers

from .categories import DEFAULT_CATEGORIES, get_product_display_name


class ColorSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=50)
    value = serializers.CharField(max_length=50)


class ProductDataSerializer(serializers.Serializer):
    """Admin-side product submission, full (create) or partial (update)."""

    name = serializers.CharField(max_length=255)
    description = serializers.CharField(allow_blank=True)
    price = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0, coerce_to_string=False)
    original_price = serializers.DecimalField(
        max_digits=12, decimal_places=2, min_value=0, required=False, allow_null=True, coerce_to_string=False
    )
    category = serializers.ChoiceField(choices=DEFAULT_CATEGORIES)
    model = serializers.CharField(max_length=255)
    specifications = serializers.JSONField(required=False, allow_null=True)
    ideal_for = serializers.ListField(child=serializers.CharField(), required=False)
    colors = ColorSerializer(many=True, required=False)
    in_stock = serializers.BooleanField(default=True)
    featured = serializers.BooleanField(default=False)
    images = serializers.ListField(child=serializers.CharField(), required=False)

    def validate(self, attrs):
        price = attrs.get("price")
        original = attrs.get("original_price")
        if price is not None and original is not None and original < price:
            raise serializers.ValidationError({"original_price": "Original price cannot be lower than the price."})
        return attrs

    def to_backend(self):
        """validated_data with decimals turned into floats for JSON."""
        data = dict(self.validated_data)
        for key in ("price", "original_price"):
            if data.get(key) is not None:
                data[key] = float(data[key])
        return data


class CategorySerializer(serializers.Serializer):
    value = serializers.CharField()
    display_name = serializers.SerializerMethodField()

    def get_display_name(self, obj):
        return get_product_display_name(obj["value"])


class ProductFilterSerializer(serializers.Serializer):
    search = serializers.CharField(required=False, allow_blank=True)
    category = serializers.CharField(required=False, allow_blank=True)
    min_price = serializers.FloatField(required=False, min_value=0)
    max_price = serializers.FloatField(required=False, min_value=0)
    in_stock = serializers.BooleanField(required=False, allow_null=True, default=None)
    sort_by = serializers.ChoiceField(choices=("name", "price", "created_at", "updated_at"), required=False)
    sort_order = serializers.ChoiceField(choices=("asc", "desc"), required=False)

    def validate(self, attrs):
        low, high = attrs.get("min_price"), attrs.get("max_price")
        if low is not None and high is not None and low > high:
            raise serializers.ValidationError({"max_price": "max_price must not be below min_price."})
        return attrs
