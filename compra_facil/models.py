"""Request models and wire formats for the Compra Fácil service."""
from pydantic import BaseModel, Field
from datetime import date, datetime
from typing import Optional, Dict, Any


# Format expected by getInfo for dateStart/dateEnd
DATE_FORMAT = "%d-%m-%Y %H:%M:%S"


class ConnectionOptions(BaseModel):
    """Options used to build a SOAP connection from a WSDL."""
    wsdl: str
    endpoint: Optional[str] = None  # overrides the address in the WSDL
    headers: Dict[str, str] = Field(default_factory=dict)
    extra: Dict[str, Any] = Field(default_factory=dict)  # zeep Settings kwargs


def format_date(value: Any) -> Any:
    """Format a date/datetime for the wire; anything else is returned as is."""
    if isinstance(value, datetime):
        return value.strftime(DATE_FORMAT)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day).strftime(DATE_FORMAT)
    return value
