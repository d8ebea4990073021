"""
Top‑level router for version 1 of the API.

This router aggregates the domain routers under one prefix.  Admin
protection is declared here and on individual routes, not inside the
handlers: the section router is included twice, once publicly (its
mutating routes carry their own admin dependency) and once under
``/admin/sections`` where every route requires the admin credentials.
"""

from fastapi import APIRouter, Depends

from ellagarden_api.app.core.security import require_admin

from .endpoints import admin, bookings, documents, sections, system

router = APIRouter()

router.include_router(system.router, tags=["system"])
router.include_router(sections.router, prefix="/sections", tags=["sections"])
router.include_router(documents.router, prefix="/documents", tags=["documents"])
router.include_router(bookings.router, prefix="/bookings", tags=["bookings"])

admin_only = [Depends(require_admin)]
router.include_router(sections.router, prefix="/admin/sections", tags=["admin"], dependencies=admin_only)
router.include_router(admin.router, prefix="/admin", tags=["admin"], dependencies=admin_only)
