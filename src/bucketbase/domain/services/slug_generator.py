"""Collection slug generation and validation.

A slug is both the collection's key inside its site and a storage path
segment, so it is restricted to characters that are safe in object keys and
URLs.
"""

import re
import unicodedata
from dataclasses import dataclass


@dataclass(frozen=True)
class SlugValidationError:
    """Represents a slug validation error.

    Attributes:
        field: The field name (always 'slug').
        message: Human-readable error message.
        code: Machine-readable error code.
    """

    field: str
    message: str
    code: str


class SlugGenerator:
    """Generate and validate collection slugs.

    Slug rules:
    - 1-64 characters
    - Lowercase letters, digits, hyphens and underscores
    - Must start with a letter or digit
    """

    MAX_LENGTH = 64
    FALLBACK = "collection"

    VALID_SLUG_PATTERN = re.compile(r"^[a-z0-9][a-z0-9_-]*$")

    @classmethod
    def generate(cls, text: str) -> str:
        """Generate a slug from a collection name.

        Examples:
            >>> SlugGenerator.generate("Blog Posts")
            'blog-posts'
            >>> SlugGenerator.generate("Café & Bar")
            'cafe-bar'
            >>> SlugGenerator.generate("2024 Events")
            '2024-events'
        """
        normalized = unicodedata.normalize("NFKD", text)
        ascii_text = normalized.encode("ascii", "ignore").decode("ascii")

        slug = re.sub(r"[^a-z0-9_]+", "-", ascii_text.lower())
        slug = re.sub(r"-+", "-", slug).strip("-_")

        if len(slug) > cls.MAX_LENGTH:
            slug = slug[: cls.MAX_LENGTH].rstrip("-_")

        return slug or cls.FALLBACK

    @classmethod
    def validate(cls, slug: str) -> list[SlugValidationError]:
        """Validate a slug against the rules.

        Returns:
            List of validation errors. Empty list if slug is valid.
        """
        errors: list[SlugValidationError] = []

        if not slug:
            errors.append(
                SlugValidationError(field="slug", message="Slug is required", code="slug_required")
            )
            return errors

        if len(slug) > cls.MAX_LENGTH:
            errors.append(
                SlugValidationError(
                    field="slug",
                    message=f"Slug must be at most {cls.MAX_LENGTH} characters",
                    code="slug_too_long",
                )
            )

        if not cls.VALID_SLUG_PATTERN.match(slug):
            errors.append(
                SlugValidationError(
                    field="slug",
                    message="Slug must contain only lowercase letters, numbers, "
                    "hyphens and underscores, and start with a letter or number",
                    code="slug_invalid_chars",
                )
            )

        return errors

    @classmethod
    def is_valid(cls, slug: str) -> bool:
        return not cls.validate(slug)
