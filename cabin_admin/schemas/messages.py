from typing import Optional

from cabin_admin.schemas.payments import RecordIdPayload


class MessageFlagsPayload(RecordIdPayload):
    """
    Schema for archiving a message. Flags left out default to True.
    """

    is_read: Optional[bool] = None
    archived: Optional[bool] = None
