"""
Errors raised by the billing services.

Routers translate these into HTTP responses; services never raise
HTTPException themselves.
"""


class BillingError(Exception):
    """Base class for billing service errors"""


class NotFoundError(BillingError):
    """A referenced entity does not exist for the current tenant"""

    def __init__(self, entity: str, entity_id):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} {entity_id} not found")


class ValidationFailedError(BillingError):
    """The request is well-formed but violates a business rule"""
