TEXT_SUBTITLE_EXTENSIONS = (".srt", ".ssa", ".ass", ".vtt")
ALL_SUBTITLE_EXTENSIONS = TEXT_SUBTITLE_EXTENSIONS + (".sub", ".idx", ".txt")
BINARY_CAPABLE_EXTENSIONS = (".sub", ".idx")

DEFAULT_FPS = 25.0
BINARY_SNIFF_BYTES = 100

# Ordered candidate labels; order only matters for ties.
ENCODING_CATALOG = (
    "utf-8",
    "windows-1252",
    "windows-1256",
    "iso-8859-6",
    "iso-8859-1",
    "windows-1251",
    "iso-8859-5",
    "iso-8859-2",
    "windows-1250",
    "iso-8859-7",
    "windows-1253",
    "iso-8859-9",
    "windows-1254",
    "big5",
    "gbk",
    "shift-jis",
    "euc-jp",
    "euc-kr",
    "utf-16le",
    "utf-16be",
    "iso-8859-8",
    "windows-1255",
    "iso-8859-8-i",
    "iso-2022-jp",
    "koi8-r",
    "koi8-u",
    "macintosh",
    "gb18030",
    "tis-620",
    "windows-874",
    "x-mac-cyrillic",
    "iso-8859-3",
    "iso-8859-4",
    "iso-8859-10",
    "iso-8859-13",
    "iso-8859-14",
    "iso-8859-15",
    "windows-1257",
    "windows-1258",
    "x-mac-ukrainian",
    "cp866",
)

# Web labels the Python codec registry does not resolve on its own.
CODEC_ALIASES = {
    "iso-8859-8-i": "iso8859_8",
    "windows-874": "cp874",
    "x-mac-cyrillic": "mac_cyrillic",
    "x-mac-ukrainian": "mac_cyrillic",
}

ARABIC_CODEPAGES = frozenset({"windows-1256", "iso-8859-6"})

# Readability weights
W_DIGITS = 1
W_LETTERS = 3
W_PUNCTUATION = 1
W_LINE_LENGTH = 2
W_TIMESTAMP = 3
W_SEQUENCE_NUMBER = 2
MIN_READABLE_LENGTH = 10
LINE_LENGTH_MIN = 5
LINE_LENGTH_MAX = 100

# Quality adjustments
W_CLEAN = 5
P_GARBLED = -5
W_ARABIC_CODEPAGE = 5

GARBLED_THRESHOLD = 0.01

HEXDUMP_LIMIT = 512
HEXDUMP_ROW = 16

MIN_PRINTABLE_RUN = 10
