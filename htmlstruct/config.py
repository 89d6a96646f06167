"""
htmlstruct Configuration Management

Handles extraction defaults with environment variable support
and default values for the tag-driven HTML record mapper.
"""

import os
from dataclasses import dataclass
from dotenv import load_dotenv

# Load environment variables from .env file if it exists
load_dotenv()


@dataclass
class Config:
    """Main configuration class for htmlstruct"""

    # Annotation key read from field tags when the caller passes none
    TAG_KEY: str = os.getenv('HTMLSTRUCT_TAG_KEY', 'xpath')

    # Field metadata entry that holds the tag string
    TAG_METADATA: str = os.getenv('HTMLSTRUCT_TAG_METADATA', 'tag')

    # Selector markers
    SKIP_SENTINEL: str = os.getenv('HTMLSTRUCT_SKIP_SENTINEL', '-')
    NESTED_SUFFIX: str = os.getenv('HTMLSTRUCT_NESTED_SUFFIX', '[..]')

    # Fields whose name contains this marker are reduced to a path basename
    ID_MARKER: str = os.getenv('HTMLSTRUCT_ID_MARKER', 'ID')

    # Logging Configuration
    LOG_LEVEL: str = os.getenv('HTMLSTRUCT_LOG_LEVEL', 'WARNING')

    def validate(self) -> None:
        """Validate configuration settings"""
        if not self.TAG_KEY.isidentifier():
            raise ValueError(f"HTMLSTRUCT_TAG_KEY must be an identifier, got {self.TAG_KEY!r}")

        if not self.TAG_METADATA:
            raise ValueError("HTMLSTRUCT_TAG_METADATA is required")

        for name in ('SKIP_SENTINEL', 'NESTED_SUFFIX', 'ID_MARKER'):
            if not getattr(self, name):
                raise ValueError(f"HTMLSTRUCT_{name} must not be empty")

    def is_skipped(self, selector: str) -> bool:
        """Whether a selector marks a field this engine must not extract"""
        return selector == self.SKIP_SENTINEL or selector.endswith(self.NESTED_SUFFIX)


# Global config instance
config = Config()

# Validate configuration on import
config.validate()
