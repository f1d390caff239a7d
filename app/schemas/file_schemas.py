from datetime import datetime

from app.schemas.base_schemas import CamelModel


class FileResponse(CamelModel):
    id: str
    file_name: str
    file_type: str
    file_size: int
    mime_type: str
    created_at: datetime
