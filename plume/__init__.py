"""
PLUME - Pages, Listings and Uploads from Markdown Entries

A static blog generator that renders metadata-headed markdown sources to HTML
pages and feeds, then publishes the result to an object storage bucket.

Architecture:
- Content Context: Source discovery, metadata parsing, markdown rendering
- Rendering Context: Theme templates, page and feed writing, build orchestration
- Publishing Context: Bucket sync passes and local preview
- Stats Context: GitHub language statistics
"""

__version__ = "0.1.0"
