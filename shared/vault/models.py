"""Contact PII models"""

from pydantic import BaseModel


class ContactBundle(BaseModel):
    """Shipping and contact details collected at checkout"""
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    city: str = ""
    region: str = ""
    postal_code: str = ""
    country: str = ""

    @property
    def display_name(self) -> str:
        """Customer name shown on vendor orders"""
        return f"{self.first_name.strip()} {self.last_name.strip()}".strip()

    def missing_fields(self) -> list[str]:
        """Names of fields that are blank"""
        return [
            name
            for name, value in self.model_dump().items()
            if not str(value).strip()
        ]
