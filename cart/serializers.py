from rest_framework import serializers

from common.numbers import format_price


class ProductSnapshotSerializer(serializers.Serializer):
    name = serializers.CharField()
    price = serializers.FloatField()
    image_url = serializers.CharField()
    images = serializers.ListField(child=serializers.CharField())
    model = serializers.CharField()
    category = serializers.CharField()
    description = serializers.CharField(allow_null=True, required=False)


class CartItemSerializer(serializers.Serializer):
    id = serializers.CharField()
    product_id = serializers.IntegerField(allow_null=True)
    quantity = serializers.IntegerField()
    color = serializers.CharField(allow_null=True, required=False)
    name = serializers.CharField()
    price = serializers.FloatField()
    image_url = serializers.CharField()
    total = serializers.FloatField()
    price_display = serializers.SerializerMethodField()
    total_display = serializers.SerializerMethodField()
    product = ProductSnapshotSerializer()

    def get_price_display(self, obj):
        return format_price(obj.price)

    def get_total_display(self, obj):
        return format_price(obj.total)


class AddToCartSerializer(serializers.Serializer):
    """
    Expected payload:
    {
        "product_id": <id>,
        "quantity": <int>,
        "color": "Red"
    }
    """

    product_id = serializers.IntegerField()
    quantity = serializers.IntegerField(required=False, default=1)
    color = serializers.CharField(required=False, allow_null=True, allow_blank=True)


class UpdateQuantitySerializer(serializers.Serializer):
    quantity = serializers.IntegerField()
