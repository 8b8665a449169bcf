"""Predefined collection sets used to seed new sites."""

from dataclasses import dataclass, field
from typing import Any

from bucketbase.domain.entities import FieldDefinition


@dataclass(frozen=True)
class TemplateCollection:
    """A collection a template creates, in stored (camelCase) field form."""

    slug: str
    name: str
    description: str
    fields: tuple[dict[str, Any], ...] = ()

    def build_fields(self) -> list[FieldDefinition]:
        """Fresh field definitions (new ids) for one provisioning run."""
        return [FieldDefinition.from_dict(dict(f)) for f in self.fields]


@dataclass(frozen=True)
class SiteTemplate:
    id: str
    name: str
    description: str
    collections: tuple[TemplateCollection, ...] = field(default_factory=tuple)


def _options(*pairs: tuple[str, str]) -> list[dict[str, str]]:
    return [{"label": label, "value": value} for label, value in pairs]


BLANK_TEMPLATE = SiteTemplate(
    id="blank",
    name="Blank Site",
    description="Start with a completely blank site with no collections.",
)

BLOG_TEMPLATE = SiteTemplate(
    id="blog",
    name="Blog",
    description="A basic blog with posts and authors.",
    collections=(
        TemplateCollection(
            slug="posts",
            name="Posts",
            description="Blog posts with title, content, and publication date.",
            fields=(
                {"name": "title", "type": "text", "required": True},
                {"name": "content", "type": "text", "required": True},
                {"name": "excerpt", "type": "text"},
                {"name": "publishDate", "type": "date", "required": True},
                {"name": "featured", "type": "boolean"},
                {
                    "name": "category",
                    "type": "select",
                    "options": _options(
                        ("News", "news"), ("Tutorial", "tutorial"), ("Opinion", "opinion")
                    ),
                },
                {"name": "tags", "type": "text"},
                {"name": "coverImage", "type": "image"},
            ),
        ),
        TemplateCollection(
            slug="authors",
            name="Authors",
            description="Blog authors with name, bio, and profile image.",
            fields=(
                {"name": "name", "type": "text", "required": True},
                {"name": "bio", "type": "text"},
                {"name": "profileImage", "type": "image"},
                {"name": "email", "type": "email"},
                {"name": "socialLinks", "type": "array"},
            ),
        ),
    ),
)

PORTFOLIO_TEMPLATE = SiteTemplate(
    id="portfolio",
    name="Portfolio",
    description="A personal portfolio site with projects and skills.",
    collections=(
        TemplateCollection(
            slug="projects",
            name="Projects",
            description="Portfolio projects with title, description, and images.",
            fields=(
                {"name": "title", "type": "text", "required": True},
                {"name": "description", "type": "text", "required": True},
                {"name": "technologies", "type": "text"},
                {"name": "projectUrl", "type": "url"},
                {"name": "repoUrl", "type": "url"},
                {"name": "images", "type": "array"},
                {"name": "featured", "type": "boolean"},
            ),
        ),
        TemplateCollection(
            slug="skills",
            name="Skills",
            description="Skills and expertise with categories and proficiency levels.",
            fields=(
                {"name": "name", "type": "text", "required": True},
                {
                    "name": "category",
                    "type": "select",
                    "required": True,
                    "options": _options(
                        ("Programming Languages", "languages"),
                        ("Frameworks & Libraries", "frameworks"),
                        ("Tools & Software", "tools"),
                        ("Soft Skills", "soft-skills"),
                    ),
                },
                {
                    "name": "proficiency",
                    "type": "select",
                    "required": True,
                    "options": _options(
                        ("Beginner", "beginner"),
                        ("Intermediate", "intermediate"),
                        ("Advanced", "advanced"),
                        ("Expert", "expert"),
                    ),
                },
                {"name": "yearsExperience", "type": "number"},
                {"name": "icon", "type": "text"},
            ),
        ),
    ),
)

SITE_TEMPLATES: dict[str, SiteTemplate] = {
    template.id: template for template in (BLANK_TEMPLATE, BLOG_TEMPLATE, PORTFOLIO_TEMPLATE)
}


def get_site_template(template_id: str) -> SiteTemplate | None:
    return SITE_TEMPLATES.get(template_id)


def list_site_templates() -> list[SiteTemplate]:
    return list(SITE_TEMPLATES.values())
