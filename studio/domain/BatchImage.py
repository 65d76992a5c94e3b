"""BatchImage domain entity: one generated ad image for a fixed format."""
import re
from dataclasses import dataclass


@dataclass(frozen=True)
class AdFormat:
    name: str
    ratio: str

    @property
    def css_ratio(self) -> str:
        return self.ratio.replace(":", " / ")


@dataclass(frozen=True)
class BatchImage:
    src: str  # data URI
    format: str
    ratio: str
    download_name: str = ""

    @staticmethod
    def file_name_for(title: str, format_name: str) -> str:
        """anuncio_<title>_<format>.jpeg with whitespace (and '/' in formats) collapsed to '_'."""
        safe_title = re.sub(r"\s+", "_", title.strip())
        safe_format = re.sub(r"[\s/]+", "_", format_name)
        return f"anuncio_{safe_title}_{safe_format}.jpeg"

    def to_dict(self):
        return {
            "src": self.src,
            "format": self.format,
            "ratio": self.ratio,
            "download_name": self.download_name,
        }
