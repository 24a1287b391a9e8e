"""Process-level infrastructure: settings, logging, and the store client."""
