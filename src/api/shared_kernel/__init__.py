"""Shared Kernel module.

Components shared by the resolver and by every application server behind
the edge proxy: the tenant context middleware and observation context.
It must not depend on any bounded context or on process infrastructure.
"""
