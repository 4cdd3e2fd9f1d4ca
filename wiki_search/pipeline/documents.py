"""
Pipeline - Document Builder

Maps validated content collections onto flat SearchDocument records.
"""

import re
from typing import Any, List

from wiki_search.schemas.content import WikiContent
from wiki_search.schemas.search import SearchDocument


_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def slugify(value: str) -> str:
    """Lowercase and collapse every run of non-alphanumerics into one hyphen.

    Hyphens left at either end are dropped, so "Machine Learning!" becomes
    "machine-learning".
    """
    return _NON_ALNUM.sub("-", value.lower()).strip("-")


def keywords(*values: Any) -> List[str]:
    """Keep truthy values only, coerced to strings."""
    return [str(value) for value in values if value]


class DocumentBuilder:
    """Derives the searchable documents for every collection."""

    def build(self, content: WikiContent) -> List[SearchDocument]:
        """
        Produce documents in a stable order.

        Args:
            content: Validated collections

        Returns:
            List of SearchDocument
        """
        documents: List[SearchDocument] = []
        documents.extend(self._identity(content))
        documents.extend(self._about(content))
        documents.extend(self._fields(content))
        documents.extend(self._languages(content))
        documents.extend(self._education(content))
        documents.extend(self._awards(content))
        documents.extend(self._repositories(content))
        documents.extend(self._videos(content))
        documents.extend(self._presence(content))
        return documents

    def _identity(self, content: WikiContent) -> List[SearchDocument]:
        identity = content.identity
        return [
            SearchDocument(
                id="identity",
                type="Identity",
                title=identity.full_name,
                description=(
                    f"{identity.location} · {identity.pronouns} · Born {identity.birth_date}"
                ),
                route="/bio",
                badges=["Bio"],
                keywords=keywords(
                    identity.preferred_name,
                    identity.motto,
                    identity.location,
                    identity.pronouns,
                ),
            ),
            SearchDocument(
                id="motto",
                type="Motto",
                title=identity.motto,
                description=content.about.headline,
                route="/",
                badges=["Quote"],
                keywords=keywords(identity.full_name, identity.location, "motto"),
            ),
        ]

    def _about(self, content: WikiContent) -> List[SearchDocument]:
        about = content.about
        return [
            SearchDocument(
                id=f"about-{index}",
                type="About",
                title=about.headline,
                description=paragraph,
                route="/bio",
                badges=["About"],
                keywords=keywords(*about.identity_focus),
            )
            for index, paragraph in enumerate(about.paragraphs)
        ]

    def _fields(self, content: WikiContent) -> List[SearchDocument]:
        return [
            SearchDocument(
                id=f"field-{slugify(field)}",
                type="Field",
                title=field,
                description=f"Area of focus: {field}",
                route="/projects",
                badges=["Focus"],
                keywords=keywords(field, "interest"),
            )
            for field in content.fields
        ]

    def _languages(self, content: WikiContent) -> List[SearchDocument]:
        return [
            SearchDocument(
                id=f"language-{language.language.lower()}",
                type="Language",
                title=f"{language.language} · {language.proficiency}",
                description=language.notes,
                route="/bio",
                badges=["Language"],
                keywords=keywords(language.language, language.proficiency, language.notes),
            )
            for language in content.languages
        ]

    def _education(self, content: WikiContent) -> List[SearchDocument]:
        return [
            SearchDocument(
                id=f"education-{entry.years}",
                type="Education",
                title=entry.institution,
                description=f"{entry.stage} · {entry.years}",
                route="/bio",
                badges=["Education"],
                keywords=keywords(entry.stage, entry.notes, entry.years),
            )
            for entry in content.education
        ]

    def _awards(self, content: WikiContent) -> List[SearchDocument]:
        return [
            SearchDocument(
                id=f"award-{award.year}-{award.field}-{award.title}",
                type="Award",
                title=f"{award.title} · {award.field}",
                description=f"{award.detail} ({award.year})",
                route="/awards",
                badges=["Award"],
                keywords=keywords(award.field, award.detail, award.year),
            )
            for award in content.awards
        ]

    def _repositories(self, content: WikiContent) -> List[SearchDocument]:
        return [
            SearchDocument(
                id=f"repo-{repo.slug}",
                type="Repository",
                title=repo.name,
                description=repo.summary or f"GitHub repo {repo.repo}",
                route=f"/repos#{repo.slug}",
                badges=["Repo"],
                keywords=keywords(repo.repo, *repo.topics),
            )
            for repo in content.repositories
        ]

    def _videos(self, content: WikiContent) -> List[SearchDocument]:
        return [
            SearchDocument(
                id=f"video-{video.slug}",
                type="Media",
                title=video.title,
                description=f"YouTube ID {video.video_id}",
                route="/media",
                badges=["Video"],
                keywords=keywords(video.platform, video.video_id),
            )
            for video in content.videos
        ]

    def _presence(self, content: WikiContent) -> List[SearchDocument]:
        presence = content.presence
        documents = [
            SearchDocument(
                id="presence-github",
                type="Presence",
                title=f"GitHub · @{presence.github.handle}",
                description=presence.github.url,
                route="/repos",
                badges=["Presence"],
                keywords=keywords("GitHub", presence.github.handle),
            )
        ]
        for account in presence.instagram:
            documents.append(
                SearchDocument(
                    id=f"presence-instagram-{account.handle}",
                    type="Presence",
                    title=f"Instagram · @{account.handle}",
                    description=account.url,
                    route="/media",
                    badges=["Presence"],
                    keywords=keywords("Instagram", account.handle),
                )
            )
        documents.append(
            SearchDocument(
                id="presence-youtube",
                type="Presence",
                title=f"YouTube · {presence.youtube.handle}",
                description=presence.youtube.url,
                route="/media",
                badges=["Presence"],
                keywords=keywords("YouTube", presence.youtube.handle),
            )
        )
        return documents
