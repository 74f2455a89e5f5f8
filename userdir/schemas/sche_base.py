from typing import Dict, Optional

from pydantic import BaseModel


class ResponseSchemaBase(BaseModel):
    success: bool = True
    code: str = ''
    message: str = ''
    errors: Optional[Dict[str, str]] = None

    def custom_response(self, code: str, message: str, errors: Optional[Dict[str, str]] = None):
        self.success = False
        self.code = code
        self.message = message
        self.errors = errors
        return self


class MetadataSchema(BaseModel):
    current_page: int
    page_size: int
    total_items: int
    total_pages: int
