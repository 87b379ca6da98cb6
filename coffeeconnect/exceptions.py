"""
Error kinds surfaced by the lifecycle managers.

Every service raises one of these; the HTTP layer maps ``status_code`` and
``detail`` straight onto the response.
"""


class CoffeeConnectError(Exception):
    """Base class for domain errors"""

    status_code = 400

    def __init__(self, detail: str = ""):
        super().__init__(detail)
        self.detail = detail or self.__class__.__name__


class NotFoundError(CoffeeConnectError):
    """Referenced entity is missing"""

    status_code = 404


class ForbiddenError(CoffeeConnectError):
    """Role or ownership check failed"""

    status_code = 403


class InvalidStateError(CoffeeConnectError):
    """Operation is not valid for the entity's current lifecycle state"""

    status_code = 409


class SelfBookingError(CoffeeConnectError):
    """A host tried to book their own timeslot"""

    status_code = 400


class ConflictError(CoffeeConnectError):
    """Lost a booking race against a concurrent writer"""

    status_code = 409


class ValidationError(CoffeeConnectError):
    """Input value outside the accepted domain"""

    status_code = 422


class InvalidTimeError(ValidationError):
    """Timeslot start time is not in the future"""


class StoreError(CoffeeConnectError):
    """The entity store failed; the operation was rolled back"""

    status_code = 503
