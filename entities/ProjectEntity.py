# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-09
# Description: ProjectEntity
# -----------------------------------------------------------------------------
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List

STATUS_PUBLISHED = "published"


@dataclass
class ProjectEntity:
    """
    A portfolio project as owned by the business store.
    Only the fields needed for indexing and result display are mirrored here.
    """
    id: str
    title: str
    description: str = ""
    technologies: List[str] = field(default_factory=list)
    github: Optional[str] = None
    live_demo: Optional[str] = None
    image: Optional[str] = None
    status: str = STATUS_PUBLISHED

    @property
    def is_published(self) -> bool:
        return self.status == STATUS_PUBLISHED

    def display_metadata(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "github": self.github,
            "live_demo": self.live_demo,
            "technologies": list(self.technologies),
            "image": self.image,
        }

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "ProjectEntity":
        ident = raw.get("id") or raw.get("_id")
        if not ident:
            raise ValueError(f"Project entry without id: {raw!r}")
        techs = raw.get("technologies") or []
        if not isinstance(techs, list):
            raise TypeError(f"technologies must be a list for project {ident}")
        return cls(
            id=str(ident),
            title=str(raw.get("title") or ""),
            description=str(raw.get("description") or ""),
            technologies=[str(t) for t in techs],
            github=raw.get("github") or None,
            live_demo=raw.get("liveDemo") or raw.get("live_demo") or None,
            image=raw.get("image") or None,
            status=str(raw.get("status") or STATUS_PUBLISHED),
        )
