from django.urls import path

from .views import HeroSliderView, HomeView

urlpatterns = [
    path("", HomeView.as_view(), name="home"),
    path("hero/", HeroSliderView.as_view(), name="hero-slider"),
]
