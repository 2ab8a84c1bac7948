from fastapi import status


class HotelBookError(Exception):
    """Base class for every recoverable failure surfaced to the user.

    ``detail`` is the status message shown to the customer or admin,
    ``status_code`` is what the JSON API answers with.
    """
    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Request failed."

    def __init__(self, detail: str | None = None):
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)


# ==== Booking ====

class InvalidDateFormat(HotelBookError):
    detail = "Invalid date format. Use YYYY-MM-DD or DD/MM/YYYY."


class CheckoutNotAfterCheckin(HotelBookError):
    detail = "Check-out date must be after check-in."


class CheckinInPast(HotelBookError):
    detail = "Check-in date must be today or in the future."


class RoomUnavailable(HotelBookError):
    status_code = status.HTTP_409_CONFLICT
    detail = "Room is already booked for those dates."


class ProfileIncomplete(HotelBookError):
    detail = "Please complete your profile before booking."


class BookingNotFound(HotelBookError):
    status_code = status.HTTP_404_NOT_FOUND
    detail = "Booking not found."


class RoomNotFound(HotelBookError):
    status_code = status.HTTP_404_NOT_FOUND
    detail = "Room not found."


# ==== Identity ====

class UsernameTaken(HotelBookError):
    status_code = status.HTTP_409_CONFLICT
    detail = "Username already taken. Please choose another."


class InvalidUsernameFormat(HotelBookError):
    detail = "Username must be 3-20 characters (letters, numbers, underscore only)"


class InvalidPhoneFormat(HotelBookError):
    detail = "Phone must be 10-15 digits only"


class PhoneMismatch(HotelBookError):
    detail = "Phone numbers don't match"


class InvalidCredentials(HotelBookError):
    status_code = status.HTTP_401_UNAUTHORIZED
    detail = "Invalid username or phone number."


class PasswordTooShort(HotelBookError):
    detail = "Password must be at least 6 characters long."


class PasswordMismatch(HotelBookError):
    detail = "Passwords do not match."


class NotAuthenticated(HotelBookError):
    status_code = status.HTTP_401_UNAUTHORIZED
    detail = "Not authenticated"


class Forbidden(HotelBookError):
    status_code = status.HTTP_403_FORBIDDEN
    detail = "Forbidden"


# ==== Storage ====

class InvalidFieldValue(HotelBookError):
    detail = "Values may not contain ':' or line breaks."


class StorageUnavailable(HotelBookError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    detail = "Record file could not be written."
