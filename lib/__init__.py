# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - supabase_client.py: Supabase Auth admin wrapper
# - images.py: Data URL decoding/encoding for photos
# - markdown.py: Report markdown to inline-styled email HTML
# - utils.py: Shared utilities (error base class, UUID normalization)
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.images import InvalidImageError, decode_data_url, image_filename, to_data_url
from lib.markdown import render_markdown_to_html
from lib.utils import ApplicationError, is_blank, normalize_uuid

__all__ = [
    # Supabase
    "SupabaseClient",
    "SupabaseClientError",
    # Images
    "InvalidImageError",
    "decode_data_url",
    "image_filename",
    "to_data_url",
    # Markdown
    "render_markdown_to_html",
    # Utils
    "ApplicationError",
    "is_blank",
    "normalize_uuid",
]
