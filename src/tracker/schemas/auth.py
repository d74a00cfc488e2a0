from pydantic import BaseModel, EmailStr, Field, field_validator
from zxcvbn import zxcvbn

# Minimum zxcvbn score (0-4 scale): 3 = "safely unguessable"
MIN_PASSWORD_SCORE = 3


class SignupRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=8, max_length=100)
    full_name: str = Field(min_length=1, max_length=100)

    @field_validator("password")
    @classmethod
    def validate_password_strength(cls, v: str) -> str:
        """Validate password strength using zxcvbn entropy estimation."""
        result = zxcvbn(v)
        score = result["score"]  # 0-4 scale

        if score < MIN_PASSWORD_SCORE:
            feedback = result.get("feedback", {})
            warning = feedback.get("warning", "")
            suggestions = feedback.get("suggestions", [])

            if warning:
                raise ValueError(f"Weak password: {warning}")
            elif suggestions:
                raise ValueError(f"Weak password: {suggestions[0]}")
            else:
                raise ValueError(
                    "Password is too weak. Use a longer password with a mix of characters."
                )

        return v

    @field_validator("full_name")
    @classmethod
    def validate_full_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Full name cannot be empty or whitespace only")
        return v


class SigninRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1, max_length=100)


class AuthResponse(BaseModel):
    jwt: str
    message: str
