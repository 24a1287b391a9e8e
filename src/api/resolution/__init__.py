"""Domain Resolution bounded context.

Maps the origin hostname of an inbound request to a tenant identifier by
a single read against the domain mapping store, for an edge proxy to
forward as the X-Tenant-ID header.
"""
