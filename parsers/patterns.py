"""
Pattern catalog for scene release names.

Every field the release parser knows about has exactly one compiled pattern
here. Scene names have no grammar, so the vocabulary below is empirical:
it encodes what shows up in real release names.

Resolution, source, codec and audio are composite patterns. Each alternative
carries a canonical label (e.g. "Blu-Ray" and "BD" both resolve to BLURAY),
and the label of the alternative that matched becomes the *_group field.
"""

import re
from typing import Dict, Optional, Pattern, Sequence, Tuple, Union


class CompositePattern:
    """Alternation of labelled sub-patterns compiled into a single regex."""

    def __init__(
        self,
        alternatives: Sequence[Tuple[str, str]],
        prefix: str = "",
        suffix: str = "",
        flags: int = 0,
    ):
        """
        Build the combined pattern.

        Args:
            alternatives: Ordered (label, sub-pattern) pairs
            prefix: Pattern placed before the alternation (e.g. a word boundary)
            suffix: Pattern placed after the alternation
            flags: re flags for the combined pattern
        """
        self.labels: Tuple[str, ...] = tuple(label for label, _ in alternatives)
        # Labels like "480p" are not valid group names, so groups are numbered
        body = "|".join(
            f"(?P<alt{index}>{pattern})"
            for index, (_, pattern) in enumerate(alternatives)
        )
        self.regex = re.compile(f"{prefix}(?:{body}){suffix}", flags)

    def search(self, text: str) -> Optional[re.Match]:
        return self.regex.search(text)

    def label(self, match: re.Match) -> str:
        """Return the upper-cased label of the alternative that matched."""
        for index, label in enumerate(self.labels):
            if match.group(f"alt{index}") is not None:
                return label.upper()
        return ""


SEASON = re.compile(
    r"(s[0-9]{2}-s[0-9]{2}|s([0-9]{1,2})[eEx])"   # S01-S03, S01E
    r"|([Ss]?([0-9]{1,2}))[Eex]"                  # 1x, 01e
    r"|([Ss]([0-9]{1,2}))",                       # S01
    re.IGNORECASE,
)

EPISODE = re.compile(
    r"[Eex][0-9]{2,4}-?[Eex]?[0-9]{2,4}"          # E01-E03, E0103
    r"|[Eex][0-9]{2,4}(?:[abc])?(?:[^0-9]|$)"     # E16., x05
    r"|\b(?:[Eex]p?\.?[0-9]{2,4}(?::?-?[Eex]?p?[0-9]{2,4})?"
    r"|[Ee]pisode\s?[0-9]{1,4})\b"                # Ep.12, Episode 5
)

YEAR = re.compile(r"[\[(]?(?:19[0-9]|20[01])[0-9][\])]?")

RESOLUTION = CompositePattern([
    ("480p", r"480p|640x480|848x480"),
    ("576p", r"576p"),
    ("720p", r"720p|1280x720"),
    ("1080p", r"1080p|1920x1080"),
    ("2160p", r"2160p"),
])

SOURCE = CompositePattern(
    [
        ("bdrip", r"BDRip"),
        ("brrip", r"BRRip"),
        ("bluray", r"BluRay|Blu-Ray|HDDVD|BD"),
        ("webdl", r"WEB[-_. ]DL|HDRIP|WEBDL|FUNi-DL|WebRip|Web-Rip|AmazonHD|NetflixHD"
                  r"|iTunesHD|WebHD|[. ]?WEB[. ](?:[xh]26[45]|DD5[. ]1)|\d+0p[. ]WEB[. ]"),
        ("hdtv", r"HDTV"),
        ("scr", r"SCR|SCREENER|DVDSCR|DVDSCREENER"),
        ("dvd", r"DVDRip|DVD[^-R]|NTSC|PAL|xvidvd"),
        ("dvdr", r"DVD-R|DVDR|DVD[0-9]"),
        ("dsr", r"WS[-_. ]DSR|DSR"),
        ("ts", r"TS|TELESYNC|HD-TS|HDTS|PDVD\b"),
        ("tc", r"TC|TELECINE|HD-TC|HDTC"),
        ("cam", r"CAMRIP|CAM|HDCAM|HD-CAM"),
        ("wp", r"WORKPRINT|WP"),
        ("pdtv", r"PDTV"),
        ("sdtv", r"SDTV"),
        ("tvrip", r"(?:HD)?TVRip|[ad]TV"),
    ],
    prefix=r"\b",
    suffix=r"\b",
    flags=re.IGNORECASE,
)

CODEC = CompositePattern(
    [
        ("x264", r"x264"),
        ("h264", r"h264"),
        ("h265", r"[xh]265|hevc"),
        ("xvidhd", r"XvidHD"),
        ("xvid", r"X-?vid"),
        ("divx", r"divx|mpeg[0-9]"),
        ("vp", r"vp(?:8|9)"),
    ],
    flags=re.IGNORECASE,
)

AUDIO = CompositePattern(
    [
        ("mp3", r"MP3"),
        ("flac", r"FLAC"),
        ("dd", r"DD[\s.]?(?:2|5)\.?(?:1|0)"),
        ("dualaudio", r"Dual[- ]Audio"),
        ("line", r"LiNE"),
        ("dts", r"DTS"),
        ("aac", r"AAC(?:\.?2\.0)?"),
        ("ac3", r"AC3D?(?:\.5\.1)?"),
    ],
    flags=re.IGNORECASE,
)

LANGUAGE = re.compile(
    r"\b(?:TRUE)?FR(?:ENCH)?\b|\bDE(?:UTSCH)?\b|\bGERMAN\b|\bEN(?:G(?:LISH)?)?\b"
    r"|\bVOST(?:(?:F(?:R)?)|A)?\b|\bMULTI(?:Lang|Truefrench|-VF2)?\b|\bSUBFRENCH\b|\bHindi\b",
    re.IGNORECASE,
)

GROUP = re.compile(r"- ?[^-]+$")
REGION = re.compile(r"R[0-9]")
DOKU = re.compile(r"\bDOKU\b", re.IGNORECASE)
EXTENDED = re.compile(r"\bEXTENDED\b", re.IGNORECASE)
UNCUT = re.compile(r"\bUNCUT\b", re.IGNORECASE)
HARDCODED = re.compile(r"\bHC\b", re.IGNORECASE)
PROPER = re.compile(r"\bPROPER\b", re.IGNORECASE)
SUBBED = re.compile(r"subbed|ger[.-]?sub(?:s|ed)?|nlsub|eng-sub", re.IGNORECASE)
REPACK = re.compile(r"\bREPACK\b", re.IGNORECASE)
IS3D = re.compile(r"\b3d\b", re.IGNORECASE)
WIDESCREEN = re.compile(r"\bWS\b", re.IGNORECASE)
CONTAINER = re.compile(r"\b\.?(?:MKV|AVI|MP4|M4V)\b", re.IGNORECASE)
WEBSITE = re.compile(r"^\[ ?[^\]]+? ?\]")
SBS = re.compile(r"\b(?:Half-)?SBS\b", re.IGNORECASE)
SIZE = re.compile(r"\d+(?:\.\d+)?(?:GB|MB)")
CONSOLE = re.compile(r"\b(?:XBOX|XBOX360|Wii|WiiU|PSP|PS4|NSW|PS3|NDS)\b")

PASSWORD = re.compile(r"\{\{[^{}]+\}\}")

# Field name -> pattern, in processing order. The order decides which match
# wins the title start when several fields sit at the front of the name.
CATALOG: Dict[str, Union[Pattern, CompositePattern]] = {
    "season": SEASON,
    "episode": EPISODE,
    "year": YEAR,
    "resolution": RESOLUTION,
    "source": SOURCE,
    "codec": CODEC,
    "audio": AUDIO,
    "language": LANGUAGE,
    "group": GROUP,
    "region": REGION,
    "doku": DOKU,
    "extended": EXTENDED,
    "uncut": UNCUT,
    "hardcoded": HARDCODED,
    "proper": PROPER,
    "subbed": SUBBED,
    "repack": REPACK,
    "is3d": IS3D,
    "widescreen": WIDESCREEN,
    "container": CONTAINER,
    "website": WEBSITE,
    "sbs": SBS,
    "size": SIZE,
    "console": CONSOLE,
}

# Publishers of PC/console releases that would otherwise look like movies
GROUP_TYPES: Dict[str, str] = {
    "CODEX": "pc",
    "DARKSiDERS": "pc",
    "PLAZA": "pc",
    "RAZOR": "pc",
    "SiMPLEX": "pc",
    "Razor1911": "pc",
    "HOODLUM": "pc",
    "SKIDROW": "pc",
    "ALiAS": "pc",
}
