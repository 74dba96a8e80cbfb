from fastapi import status


class RestaurantError(Exception):
    """Base class for workflow failures; carries the HTTP status it maps to."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFound(RestaurantError):
    status_code = status.HTTP_404_NOT_FOUND


class ValidationError(RestaurantError):
    status_code = status.HTTP_400_BAD_REQUEST


class TableNotFound(ValidationError):
    def __init__(self, table_number):
        super().__init__(f"Table {table_number} not found")
        self.table_number = table_number


class TableUnavailable(RestaurantError):
    status_code = status.HTTP_400_BAD_REQUEST


class ReservationConflict(TableUnavailable):
    status_code = status.HTTP_409_CONFLICT

    def __init__(self, table_number, conflicts):
        super().__init__(
            f"Table {table_number} is already reserved for this time slot. "
            "Please choose a different time or table."
        )
        self.table_number = table_number
        self.conflicts = conflicts


class DuplicateId(RestaurantError):
    status_code = status.HTTP_409_CONFLICT


class InvalidCredentials(RestaurantError):
    status_code = status.HTTP_401_UNAUTHORIZED


class StorageFailure(RestaurantError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
