from ..constants.service_code import COLLECTIONS
from .base_model import BaseModel

INTEGRATION_TYPES = ["whatsapp", "instagram", "facebook", "webhook"]


class Integration(BaseModel):
    """
    A configured third-party integration. Only the record lives here; talking
    to the provider is somebody else's job.
    """

    collection_name = COLLECTIONS["INTEGRATIONS"]

    def __init__(self, owner_id, type, name=None, config=None, active=True, **kwargs):
        super().__init__(owner_id=owner_id, **kwargs)
        self.type = type
        self.name = name or type
        self.config = config or {}
        self.active = active
