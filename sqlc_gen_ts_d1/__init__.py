"""sqlc plugin generating TypeScript for Cloudflare D1."""

__version__ = "0.4.0"
