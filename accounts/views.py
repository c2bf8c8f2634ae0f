import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from common import toasts
from common.exceptions import StorefrontError
from common.session import session_for

from .client import AuthClient
from .serializers import LoginSerializer, RegisterSerializer, SessionUserSerializer

logger = logging.getLogger(__name__)


def _first_error(serializer):
    field, errors = next(iter(serializer.errors.items()))
    return str(errors[0]) if field == "non_field_errors" else f"{field}: {errors[0]}"


class LoginView(APIView):

    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        if not serializer.is_valid():
            toast = toasts.validation_error(_first_error(serializer))
            return Response({"errors": serializer.errors, "toast": toast.as_dict()}, status=status.HTTP_400_BAD_REQUEST)

        client = AuthClient(session_for(request))
        try:
            result = client.login(serializer.validated_data["email"], serializer.validated_data["password"])
        except StorefrontError as exc:
            toast = toasts.error("Login Failed", exc.message or "Invalid credentials")
            return Response({"detail": exc.message, "toast": toast.as_dict()}, status=status.HTTP_401_UNAUTHORIZED)

        user = result["user"]
        return Response(
            {
                "message": "Login successful",
                "user": SessionUserSerializer(user).data,
                "toast": toasts.auth_success(f"Welcome back, {user.get('name', '')}!").as_dict(),
            },
            status=status.HTTP_200_OK,
        )


class RegisterView(APIView):

    def post(self, request):
        serializer = RegisterSerializer(data=request.data)
        if not serializer.is_valid():
            toast = toasts.validation_error(_first_error(serializer))
            return Response({"errors": serializer.errors, "toast": toast.as_dict()}, status=status.HTTP_400_BAD_REQUEST)

        data = serializer.validated_data
        client = AuthClient(session_for(request))
        try:
            user = client.register(data["email"], data["password"], data["name"])
        except StorefrontError as exc:
            toast = toasts.error("Registration Failed", exc.message or "Registration failed")
            return Response({"detail": exc.message, "toast": toast.as_dict()}, status=status.HTTP_400_BAD_REQUEST)

        return Response(
            {
                "message": "Signup successful",
                "user": SessionUserSerializer(user).data,
                "toast": toasts.auth_success(f"Welcome, {user.get('name', '')}!").as_dict(),
            },
            status=status.HTTP_201_CREATED,
        )


class LogoutView(APIView):

    def post(self, request):
        AuthClient(session_for(request)).logout()
        return Response({"message": "Logged out"}, status=status.HTTP_200_OK)


class CurrentUserView(APIView):

    def get(self, request):
        user = AuthClient(session_for(request)).get_current_user()
        if user is None:
            return Response({"authenticated": False, "user": None})
        return Response({"authenticated": True, "user": SessionUserSerializer(user).data})
