from django.urls import path

from .views import AdminImageUpload, AdminProductCreate, AdminProductDetail, admin_chat_stats, admin_sidebar

urlpatterns = [
    path("sidebar/", admin_sidebar, name="admin-sidebar"),
    path("chat-stats/", admin_chat_stats, name="admin-chat-stats"),
    path("products/", AdminProductCreate.as_view(), name="admin-products-create"),
    path("products/upload/", AdminImageUpload.as_view(), name="admin-products-upload"),
    path("products/<int:pk>/", AdminProductDetail.as_view(), name="admin-products-detail"),
]
