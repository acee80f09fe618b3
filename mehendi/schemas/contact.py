from pydantic import BaseModel, ConfigDict, EmailStr, field_validator
from pydantic import ValidationError as PydanticValidationError

from mehendi.errors import ValidationError


class ContactForm(BaseModel):
    """Inquiry sent from the public contact page."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str
    email: EmailStr
    phone: str
    message: str

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        if len(v) < 2:
            raise ValueError("Name must be at least 2 characters")
        if len(v) > 100:
            raise ValueError("Name is too long")
        return v

    @field_validator("email", mode="before")
    @classmethod
    def validate_email_length(cls, v):
        if isinstance(v, str) and len(v.strip()) > 255:
            raise ValueError("Email is too long")
        return v

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v):
        if len(v) < 10:
            raise ValueError("Phone number must be at least 10 digits")
        if len(v) > 20:
            raise ValueError("Phone number is too long")
        return v

    @field_validator("message")
    @classmethod
    def validate_message(cls, v):
        if len(v) < 10:
            raise ValueError("Message must be at least 10 characters")
        if len(v) > 1000:
            raise ValueError("Message is too long")
        return v


def parse_contact(data):
    """Validate raw form data; field messages end up in ``ValidationError.errors``."""
    try:
        return ContactForm.model_validate(data)
    except PydanticValidationError as e:
        errors = {}
        for error in e.errors():
            field = str(error["loc"][0]) if error["loc"] else "form"
            message = error["msg"]
            if error["type"] == "value_error":
                message = message.replace("Value error, ", "", 1)
            if field == "email" and message != "Email is too long":
                message = "Please enter a valid email address"
            errors.setdefault(field, message)
        raise ValidationError("Please correct the highlighted fields", errors=errors) from None
