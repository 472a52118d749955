"""
API routes for the library registry.
Provides read-only REST endpoints over the registered libraries.
"""

import logging
from typing import Dict, List

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel

from core.exceptions import NoSuchRealmError, NotARealmConnectorError
from core.library_registry import LibraryRegistry
from utils.helpers import get_system_info

logger = logging.getLogger(__name__)

router = APIRouter()

# Pydantic models for request/response
class LibraryInfo(BaseModel):
    name: str
    type: str
    state: str

class VerifyRequest(BaseModel):
    account_id: str
    credential: str

class AccountResponse(BaseModel):
    name: str
    roles: List[str]

class HealthResponse(BaseModel):
    status: str
    libraries: int
    files: int
    system: Dict

def get_library_registry(request: Request) -> LibraryRegistry:
    return request.app.state.registry

@router.get("/health", response_model=HealthResponse)
def health_check(registry: LibraryRegistry = Depends(get_library_registry)):
    """
    System health check endpoint.
    """
    return HealthResponse(
        status="healthy",
        libraries=len(registry.list_libraries()),
        files=len(registry.tracked_files()),
        system=get_system_info()
    )

@router.get("/libraries")
def list_libraries(registry: LibraryRegistry = Depends(get_library_registry)) -> Dict[str, str]:
    """
    List registered libraries with their type.
    """
    return registry.list_libraries()

@router.get("/libraries/{name}", response_model=LibraryInfo)
def get_library(name: str, registry: LibraryRegistry = Depends(get_library_registry)):
    """
    Get a single library.
    """
    library = registry.get_library(name)
    if library is None:
        raise HTTPException(status_code=404, detail=f"Library not found: {name}")
    return LibraryInfo(name=name, type=library.type_tag, state=library.state.value)

@router.get("/types")
def list_types(registry: LibraryRegistry = Depends(get_library_registry)) -> Dict[str, str]:
    """
    List library types that configuration files may declare.
    """
    return registry.type_registry.list_types()

@router.post("/realms/{name}/verify", response_model=AccountResponse)
def verify_credential(name: str, body: VerifyRequest,
                      registry: LibraryRegistry = Depends(get_library_registry)):
    """
    Verify a credential against a realm connector.
    """
    try:
        identity_manager = registry.get_identity_manager(name)
    except NoSuchRealmError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except NotARealmConnectorError as e:
        raise HTTPException(status_code=400, detail=str(e))

    account = identity_manager.verify(body.account_id, body.credential)
    if account is None:
        logger.info(f"Rejected credential for {body.account_id} on realm {name}")
        raise HTTPException(status_code=401, detail="Invalid credentials")
    return AccountResponse(name=account.name, roles=sorted(account.roles))
