DEFAULT_CATEGORIES = ("E-Bike", "E-Trike", "E-Scooter", "E-Motorcycle", "E-Dump")

CATEGORY_DISPLAY_NAMES = {
    "E-Bike": "Electric Bicycles",
    "E-Trike": "Electric Tricycles",
    "E-Motorcycle": "Electric Motorcycles",
    "E-Dump": "Electric Dump Trucks",
    "E-Scooter": "Electric Scooters",
}

DISPLAY_NAME_CATEGORIES = {v: k for k, v in CATEGORY_DISPLAY_NAMES.items()}


def get_product_display_name(category):
    return CATEGORY_DISPLAY_NAMES.get(category, category)


def get_category_from_display_name(display_name):
    return DISPLAY_NAME_CATEGORIES.get(display_name, display_name)
