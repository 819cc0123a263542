"""
Application-wide constants.

This module centralizes the magic strings and numbers used by the order
domain, the persistence layer and the API.
"""


class LineItemFormat:
    """Separators used to pack line items into the order detail column"""

    ENTRY_SEPARATOR = '||'
    VALUE_SEPARATOR = '::'
    DISPLAY_SEPARATOR = ' · '


class WeekFormat:
    """Business week encoding"""

    ID_DATE_FORMAT = '%Y%m%d'       # fixed width, sorts chronologically
    LABEL_DATE_FORMAT = '%d/%m/%Y'
    ID_SEPARATOR = '_'
    LABEL_SEPARATOR = ' - '
    DAYS_PER_WEEK = 7

    # datetime.weekday(): Monday=0 ... Sunday=6 -> days back to the last Friday
    DAYS_SINCE_FRIDAY = {
        4: 0,  # Friday
        5: 1,  # Saturday
        6: 2,  # Sunday
        0: 3,  # Monday
        1: 4,  # Tuesday
        2: 5,  # Wednesday
        3: 6,  # Thursday
    }


class SettingsDefaults:
    """Singleton settings row"""

    ROW_ID = 1
    COST_PER_DOZEN = 0.0
    SALE_PER_DOZEN = 0.0


class Messages:
    """User-facing messages"""

    CLIENT_NAME_REQUIRED = "The client name is required."
    LINE_ITEMS_REQUIRED = "Add at least one flavor with a quantity."
    LINE_ITEMS_INVALID = "Check the flavors: every item needs a name and a quantity greater than 0."
    SETTINGS_INVALID = "Check the settings: cost and sale must be greater than or equal to 0."
    SETTINGS_NEGATIVE = "Settings values must be greater than or equal to 0."
    UNEXPECTED_ERROR = "An unexpected error occurred."


class TableNames:
    """Database table names, also used as change-notification topics"""

    SETTINGS = 'settings'
    CLIENTS = 'clients'
    ORDERS = 'orders'


class HTTPStatus:
    """HTTP status codes used throughout the application"""

    OK = 200
    CREATED = 201
    BAD_REQUEST = 400
    NOT_FOUND = 404
    UNPROCESSABLE_ENTITY = 422
    INTERNAL_SERVER_ERROR = 500
