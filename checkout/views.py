from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from cart.serializers import CartItemSerializer
from common import toasts
from common.session import session_for

from .orchestrator import CheckoutFlow, CheckoutMode, CheckoutOutcome, CheckoutState
from .serializers import (
    CheckoutLoginSerializer,
    CheckoutRegisterSerializer,
    PaymentMethodSerializer,
    ShippingInfoSerializer,
)

STATE_KEY = "checkout"


def _flow(request):
    state = CheckoutState.from_dict(request.session.get(STATE_KEY))
    return CheckoutFlow(session_for(request), state=state)


def _save(request, flow):
    request.session[STATE_KEY] = flow.state.as_dict()


def _respond(request, flow, outcome, failure_status=status.HTTP_400_BAD_REQUEST):
    _save(request, flow)
    body = flow.snapshot()
    body.update(
        success=outcome.ok,
        cart=CartItemSerializer(flow.cart, many=True).data,
        redirect=outcome.redirect,
        field=outcome.field,
        toast=outcome.toast.as_dict() if outcome.toast else None,
    )
    return Response(body, status=status.HTTP_200_OK if outcome.ok else failure_status)


def _invalid(serializer):
    field, errors = next(iter(serializer.errors.items()))
    toast = toasts.validation_error(str(errors[0]))
    return Response({"success": False, "field": field, "errors": serializer.errors, "toast": toast.as_dict()},
                    status=status.HTTP_400_BAD_REQUEST)


class CheckoutView(APIView):
    """GET /checkout/ -> current step, prefilled shipping form, cart and totals."""

    def get(self, request):
        flow = _flow(request)
        outcome = flow.start()
        # an empty cart sends the customer back to /cart; that is not an error
        return _respond(request, flow, outcome, failure_status=status.HTTP_200_OK)


class CheckoutModeView(APIView):
    """POST {"mode": "login" | "register"}"""

    def post(self, request):
        mode = request.data.get("mode")
        if mode not in (CheckoutMode.LOGIN.value, CheckoutMode.REGISTER.value):
            return Response({"success": False, "detail": "mode must be login or register"},
                            status=status.HTTP_400_BAD_REQUEST)
        flow = _flow(request)
        flow.start()
        return _respond(request, flow, flow.switch_mode(mode), failure_status=status.HTTP_409_CONFLICT)


class CheckoutLoginView(APIView):

    def post(self, request):
        serializer = CheckoutLoginSerializer(data=request.data)
        if not serializer.is_valid():
            return _invalid(serializer)
        flow = _flow(request)
        outcome = flow.login(serializer.validated_data["email"], serializer.validated_data["password"])
        return _respond(request, flow, outcome, failure_status=status.HTTP_401_UNAUTHORIZED)


class CheckoutRegisterView(APIView):

    def post(self, request):
        serializer = CheckoutRegisterSerializer(data=request.data)
        if not serializer.is_valid():
            return _invalid(serializer)
        data = serializer.validated_data
        flow = _flow(request)
        outcome = flow.register(data["name"], data["email"], data["password"], data["confirm_password"])
        return _respond(request, flow, outcome)


class CheckoutShippingView(APIView):
    """PATCH a partial shipping form and/or payment method while it is being filled."""

    def patch(self, request):
        flow = _flow(request)
        flow.start()
        if not flow.is_authenticated:
            outcome = CheckoutOutcome(ok=False, toast=toasts.auth_required())
            return _respond(request, flow, outcome, failure_status=status.HTTP_401_UNAUTHORIZED)

        draft = ShippingInfoSerializer(data=request.data, partial=True)
        draft.is_valid(raise_exception=True)
        flow.update_shipping({k: v for k, v in draft.validated_data.items() if k in request.data})

        if "payment_method" in request.data:
            payment = PaymentMethodSerializer(data=request.data)
            if not payment.is_valid():
                _save(request, flow)
                return _invalid(payment)
            flow.set_payment_method(payment.validated_data["payment_method"])

        return _respond(request, flow, flow.validate(), failure_status=status.HTTP_200_OK)


class CheckoutSubmitView(APIView):
    """POST the final shipping form and payment method; places the order."""

    def post(self, request):
        flow = _flow(request)
        flow.start()

        if flow.is_authenticated:
            draft = ShippingInfoSerializer(data=request.data, partial=True)
            draft.is_valid(raise_exception=True)
            flow.update_shipping({k: v for k, v in draft.validated_data.items() if k in request.data})
            if "payment_method" in request.data:
                chosen = flow.set_payment_method(request.data.get("payment_method"))
                if not chosen.ok:
                    return _respond(request, flow, chosen)

        outcome = flow.submit()
        if not outcome.ok:
            code = status.HTTP_401_UNAUTHORIZED if not flow.is_authenticated else status.HTTP_400_BAD_REQUEST
            return _respond(request, flow, outcome, failure_status=code)

        response = _respond(request, flow, outcome)
        request.session.pop(STATE_KEY, None)
        return response
