"""
Language registry for code generation targets.

The set of target languages is closed: each known language is described by
a LanguageProfile (file extension, tag layout, last-resort type) and looked
up by its configuration name or an alias.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Any


class RegistryError(Exception):
    """Exception raised for registry-related errors."""

    pass


class TagStyle(Enum):
    """How rendered field tags are laid out in generated code."""

    STRUCT_TAG = "struct_tag"  # Go: `json:"id" db:"id"`
    ANNOTATION = "annotation"  # one attribute/annotation/decorator per line
    NONE = "none"  # language has no field-level metadata


# Fallback for languages without a dedicated last-resort type
DEFAULT_FALLBACK_TYPE = "any"


@dataclass(frozen=True)
class LanguageProfile:
    """Static facts about one target language."""

    name: str
    extension: str
    tag_style: TagStyle = TagStyle.NONE
    fallback_type: str = DEFAULT_FALLBACK_TYPE
    aliases: tuple = field(default_factory=tuple)


class LanguageRegistry:
    """Registry for managing known target languages."""

    def __init__(self):
        """Initialize empty registry."""
        self._profiles: Dict[str, LanguageProfile] = {}
        self._aliases: Dict[str, str] = {}

    def register(self, profile: LanguageProfile):
        """
        Register a language profile.

        A language that is already known is skipped silently.

        Raises:
            RegistryError: If an alias conflicts with another language
        """
        language_key = profile.name.lower()

        if language_key in self._profiles:
            return

        for alias in profile.aliases:
            alias_key = alias.lower()
            if alias_key == language_key:
                continue
            if alias_key in self._profiles:
                raise RegistryError(
                    f"Alias '{alias}' conflicts with existing primary language"
                )
            if alias_key in self._aliases and self._aliases[alias_key] != language_key:
                raise RegistryError(
                    f"Alias '{alias}' already points to '{self._aliases[alias_key]}'"
                )
            self._aliases[alias_key] = language_key

        self._profiles[language_key] = profile

    def find(self, language: str) -> Optional[LanguageProfile]:
        """Get the profile for a language name or alias, or None."""
        language_key = language.lower()
        if language_key in self._profiles:
            return self._profiles[language_key]
        if language_key in self._aliases:
            return self._profiles[self._aliases[language_key]]
        return None

    def get(self, language: str) -> LanguageProfile:
        """
        Get the profile for a language name or alias.

        Raises:
            RegistryError: If the language is unknown
        """
        profile = self.find(language)
        if profile is None:
            raise RegistryError(
                f"Unknown language: {language}. "
                f"Available: {', '.join(self.list_languages())}"
            )
        return profile

    def canonical_name(self, language: str) -> str:
        """Primary name for a language, or the input when unknown."""
        profile = self.find(language)
        return profile.name if profile else language

    def list_languages(self) -> List[str]:
        """Get sorted list of registered primary language names."""
        return sorted(self._profiles.keys())

    def get_aliases_for_language(self, language: str) -> List[str]:
        """Get all aliases pointing at a primary language."""
        language_key = language.lower()
        return sorted(a for a, target in self._aliases.items() if target == language_key)

    def is_supported(self, language: str) -> bool:
        """Check if a language name or alias is registered."""
        return self.find(language) is not None

    def get_language_info(self, language: str) -> Dict[str, Any]:
        """Describe a registered language for display."""
        profile = self.get(language)
        return {
            "name": profile.name,
            "file_extension": profile.extension,
            "tag_style": profile.tag_style.value,
            "fallback_type": profile.fallback_type,
            "aliases": self.get_aliases_for_language(profile.name),
        }


BUILTIN_LANGUAGES = [
    LanguageProfile("rust", "rs", TagStyle.ANNOTATION, "String", ("rs",)),
    LanguageProfile("typescript", "ts", TagStyle.NONE, "string", ("ts",)),
    LanguageProfile("go", "go", TagStyle.STRUCT_TAG, "string", ("golang",)),
    LanguageProfile("python", "py", TagStyle.ANNOTATION, "str", ("py",)),
    LanguageProfile("java", "java", TagStyle.ANNOTATION, "String"),
    LanguageProfile("csharp", "cs", TagStyle.ANNOTATION, "string", ("c#", "cs")),
    LanguageProfile("php", "php", TagStyle.ANNOTATION, "string"),
    LanguageProfile("ruby", "rb", TagStyle.NONE, "String", ("rb",)),
    LanguageProfile("swift", "swift"),
    LanguageProfile("kotlin", "kt", aliases=("kt",)),
    LanguageProfile("dart", "dart"),
    LanguageProfile("zig", "zig"),
    LanguageProfile("nim", "nim"),
    LanguageProfile("haskell", "hs", aliases=("hs",)),
    LanguageProfile("elixir", "ex", aliases=("ex",)),
    LanguageProfile("crystal", "cr", aliases=("cr",)),
    LanguageProfile("ocaml", "ml", aliases=("ml",)),
]

# Global registry instance - created once
_global_registry: Optional[LanguageRegistry] = None


def get_registry() -> LanguageRegistry:
    """Get the global language registry, initializing if needed."""
    global _global_registry
    if _global_registry is None:
        _global_registry = LanguageRegistry()
        for profile in BUILTIN_LANGUAGES:
            _global_registry.register(profile)
    return _global_registry


def get_language_profile(language: str) -> Optional[LanguageProfile]:
    """Look up a language in the global registry (None when unknown)."""
    return get_registry().find(language)


def list_supported_languages() -> List[str]:
    """List all languages from the global registry."""
    return get_registry().list_languages()


def is_language_supported(language: str) -> bool:
    """Check if language is known to the global registry."""
    return get_registry().is_supported(language)


def get_language_info(language: str) -> Dict[str, Any]:
    """Get information about a known language."""
    return get_registry().get_language_info(language)
