"""
Release parser for extracting metadata from scene release names.

Handles names such as:
- Dot separators (Winx.Club.S06E16.720p.WEB-DL.h264-pbw)
- Space separators (Two and a Half Men S12E01 HDTV x264 REPACK-LOL)
- Site prefixes ([ www.Speed.cd ] -Sons.of.Anarchy.S07E07...)
- Season and episode ranges (S01-S03, S01E01-E03)
- Passwords embedded as {{secret}}

Every catalog pattern is matched independently. The title is whatever sits
in front of the leftmost match, so no tokenizer is involved.
"""

import re
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

from parsers import patterns
from utils.logger import get_logger

logger = get_logger()


class ReleaseType(str, Enum):
    """Kind of release a name describes."""

    MOVIE = "movie"
    TV_SHOW = "tvshow"
    CONSOLE = "console"
    PC = "pc"


@dataclass(frozen=True)
class Release:
    """Structured representation of a parsed scene release name."""

    input: str
    title: str = field(default="", init=False)
    type: ReleaseType = ReleaseType.MOVIE
    season: int = 0
    season_end: int = 0
    episode: int = 0
    episode_end: int = 0
    year: int = 0
    resolution: str = ""
    source: str = ""
    source_group: str = ""
    codec: str = ""
    codec_group: str = ""
    audio: str = ""
    audio_group: str = ""
    group: str = ""
    region: str = ""
    container: str = ""
    website: str = ""
    language: str = ""
    password: str = ""
    sbs: str = ""
    size: str = ""
    doku: bool = False
    extended: bool = False
    hardcoded: bool = False
    subbed: bool = False
    proper: bool = False
    repack: bool = False
    is_3d: bool = False
    uncut: bool = False
    widescreen: bool = False

    @property
    def is_tv_show(self) -> bool:
        return self.type == ReleaseType.TV_SHOW

    def to_dict(self, omit_empty: bool = False) -> Dict[str, Any]:
        """
        Convert to a JSON-serializable mapping.

        Args:
            omit_empty: Drop fields holding "", 0 or False

        Returns:
            Field name -> value, in declaration order
        """
        data = asdict(self)
        data["type"] = self.type.value
        if omit_empty:
            data = {key: value for key, value in data.items() if value}
        return data

    def __str__(self) -> str:
        """String representation for logging."""
        if self.is_tv_show:
            if self.episode:
                return f'TV Show - "{self.title}" S{self.season:02d}E{self.episode:02d}'
            return f'TV Show - "{self.title}" S{self.season:02d} (Season Pack)'
        if self.type != ReleaseType.MOVIE:
            return f'{self.type.value.upper()} - "{self.title}"'
        return f'Movie - "{self.title}"' + (f' ({self.year})' if self.year else '')


def parse_int(text: str) -> int:
    """Keep only the digits of text and convert them; 0 when nothing is left."""
    digits = re.sub(r"[^0-9]", "", text)
    return int(digits) if digits else 0


def clean_title(name: str) -> str:
    """Turn separators into spaces. Inner runs of spaces are kept."""
    for separator in (".", "_", "-"):
        name = name.replace(separator, " ")
    return name.strip(" ")


class _TitleBounds:
    """Start/end offsets of the title inside the original input."""

    def __init__(self, text: str):
        self.text = text
        self.start = 0
        self.end = 0

    def mark(self, matched: str) -> None:
        """Record where a field's matched text first occurs in the input."""
        if not self.text:
            return
        index = self.text.find(matched)
        if index <= 0:
            self.start = len(matched)
        elif self.end == 0 or index < self.end:
            self.end = index

    def title(self) -> str:
        if self.end != 0 and self.end <= len(self.text) and self.start < self.end:
            return clean_title(self.text[self.start:self.end])
        return ""


class ReleaseParser:
    """Parser for extracting metadata from scene release names."""

    EPISODE_WORD = re.compile(r"episode", re.IGNORECASE)
    EPISODE_SEPARATORS = re.compile(r"\.|-|ep|e|x", re.IGNORECASE)

    FLAGS = {
        "doku": "doku",
        "extended": "extended",
        "uncut": "uncut",
        "hardcoded": "hardcoded",
        "proper": "proper",
        "subbed": "subbed",
        "repack": "repack",
        "is3d": "is_3d",
        "widescreen": "widescreen",
    }

    TEXT_FIELDS = ("region", "website", "language", "sbs", "size")

    @classmethod
    def parse(cls, name: str) -> Release:
        """
        Parse a release name and extract its metadata.

        Never raises: anything the catalog does not recognise is left at its
        zero value, and an empty title means the name was not understood.

        Args:
            name: Release, file or folder name to parse

        Returns:
            Release with every detected field populated
        """
        fields: Dict[str, Any] = {}
        bounds = _TitleBounds(name)

        working = name
        password = patterns.PASSWORD.search(working)
        if password:
            fields["password"] = password.group(0)[2:-2]
            working = patterns.PASSWORD.sub("", working)

        release_type: Optional[ReleaseType] = None

        for key, pattern in patterns.CATALOG.items():
            match = pattern.search(working)
            if not match:
                continue
            matched = match.group(0)

            if key == "season":
                seasons = matched.split("-")
                fields["season"] = parse_int(seasons[0])
                if len(seasons) > 1:
                    fields["season_end"] = parse_int(seasons[1])
            elif key == "episode":
                cls._extract_episode(matched, fields)
            elif key == "year":
                fields["year"] = parse_int(matched)
            elif key == "resolution":
                fields["resolution"] = pattern.label(match).lower()
            elif key in ("source", "codec", "audio"):
                fields[key] = matched.strip(" ") if key == "source" else matched
                fields[f"{key}_group"] = pattern.label(match)
            elif key == "group":
                if cls._looks_technical(matched):
                    logger.debug(f"Ignoring technical tag as group: {matched!r}")
                    continue
                fields["group"] = patterns.CONTAINER.sub("", matched.replace("-", "", 1))
            elif key == "console":
                release_type = ReleaseType.CONSOLE
            elif key == "container":
                fields["container"] = matched.replace(".", "")
            elif key in cls.FLAGS:
                fields[cls.FLAGS[key]] = True
            elif key in cls.TEXT_FIELDS:
                fields[key] = matched

            bounds.mark(matched)

        fields["type"] = cls._classify(fields, release_type)
        if fields["type"] != ReleaseType.TV_SHOW:
            fields["episode"] = 0

        release = Release(input=name, **fields)
        # Only the parser derives a title; it is not a constructor argument
        object.__setattr__(release, "title", bounds.title())
        logger.debug(f"Parsed '{name}': {release}")
        return release

    @classmethod
    def _extract_episode(cls, matched: str, fields: Dict[str, Any]) -> None:
        """Fill episode/episode_end unless the match is really a codec tag."""
        if patterns.CODEC.search(matched):
            return
        clean = cls.EPISODE_WORD.sub("", matched)
        episodes = [part for part in cls.EPISODE_SEPARATORS.split(clean) if part]
        if not episodes:
            return
        fields["episode"] = parse_int(episodes[0])
        if len(episodes) > 1:
            fields["episode_end"] = parse_int(episodes[1])

    @staticmethod
    def _looks_technical(matched: str) -> bool:
        """True when a trailing "-TAG" is a codec, source or language, not a group."""
        return bool(
            patterns.CODEC.search(matched)
            or patterns.SOURCE.search(matched)
            or patterns.LANGUAGE.search(matched)
        )

    @staticmethod
    def _classify(fields: Dict[str, Any], release_type: Optional[ReleaseType]) -> ReleaseType:
        """
        Decide the release type from the extracted fields.

        A codec such as x264 can be misread as episode 264, so an episode
        equal to the codec's number does not make a TV show.
        """
        episode = fields.get("episode", 0)
        if fields.get("season", 0) > 0 or (
            episode > 0 and episode != parse_int(fields.get("codec", ""))
        ):
            return ReleaseType.TV_SHOW

        group_type = patterns.GROUP_TYPES.get(fields.get("group", ""))
        if group_type:
            return ReleaseType(group_type)

        return release_type or ReleaseType.MOVIE


def parse(name: str) -> Release:
    """Parse a scene release name. See ReleaseParser.parse."""
    return ReleaseParser.parse(name)
