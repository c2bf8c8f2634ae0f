from dataclasses import asdict, dataclass

SUCCESS = "success"
ERROR = "error"
WARNING = "warning"
INFO = "info"


@dataclass(frozen=True)
class Toast:
    level: str
    title: str
    message: str = ""

    def as_dict(self):
        return asdict(self)


def success(title, message=""):
    return Toast(SUCCESS, title, message)


def error(title, message=""):
    return Toast(ERROR, title, message)


def warning(title, message=""):
    return Toast(WARNING, title, message)


def validation_error(message):
    return Toast(ERROR, "Validation Error", message)


def auth_required(message="Please sign in to continue"):
    return Toast(ERROR, "Authentication Required", message)


def auth_success(message):
    return Toast(SUCCESS, "Signed In", message)


def order_placed(order_number):
    return Toast(SUCCESS, "Order Placed", f"Your order {order_number} has been placed successfully")
