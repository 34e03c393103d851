from typing import Optional

from cachetools import TTLCache
from fastapi import APIRouter, Depends, status
from pydantic import BaseModel
from sqlalchemy.orm import Session

from campus import repository
from campus.config import get_settings
from campus.database import get_db
from campus.dependencies import get_current_principal, require_admin
from campus.models import Bus, CafeteriaInfo, Classroom, Lab, MenuItem
from campus.repository import CatalogRepository
from campus.schemas import (
    BusCreate,
    BusRead,
    BusUpdate,
    CafeteriaInfoRead,
    CafeteriaInfoUpdate,
    ClassroomCreate,
    ClassroomRead,
    ClassroomUpdate,
    LabCreate,
    LabRead,
    LabStatusUpdate,
    LabUpdate,
    MenuItemCreate,
    MenuItemRead,
    MenuItemUpdate,
    Message,
    Principal,
)

settings = get_settings()
router = APIRouter(prefix="/api")

DEFAULT_CAFETERIA_INFO = CafeteriaInfoRead(location="Main Campus", contact="N/A", hours="8:00 AM - 8:00 PM")
cafeteria_info_cache: TTLCache[str, CafeteriaInfoRead] = TTLCache(maxsize=1, ttl=settings.cafeteria_cache_ttl)
_INFO_KEY = "cafeteria-info"


def register_crud(
    path: str,
    repo: CatalogRepository,
    create_schema: type[BaseModel],
    update_schema: type[BaseModel],
    read_schema: type[BaseModel],
    tag: str,
) -> None:
    """Mount get/create/update/delete routes for one catalog."""

    @router.get(f"{path}/{{item_id}}", response_model=read_schema, tags=[tag])
    def get_item(
        item_id: int,
        _: Principal = Depends(get_current_principal),
        db: Session = Depends(get_db),
    ):
        return repo.get(db, item_id)

    @router.post(path, response_model=read_schema, status_code=status.HTTP_201_CREATED, tags=[tag])
    def create_item(
        item_in: create_schema,
        _: Principal = Depends(require_admin),
        db: Session = Depends(get_db),
    ):
        return repo.create(db, item_in.model_dump())

    @router.put(f"{path}/{{item_id}}", response_model=read_schema, tags=[tag])
    def update_item(
        item_id: int,
        item_update: update_schema,
        _: Principal = Depends(require_admin),
        db: Session = Depends(get_db),
    ):
        return repo.update(db, item_id, item_update.model_dump(exclude_unset=True, exclude_none=True))

    @router.delete(f"{path}/{{item_id}}", response_model=Message, tags=[tag])
    def delete_item(
        item_id: int,
        _: Principal = Depends(require_admin),
        db: Session = Depends(get_db),
    ) -> Message:
        repo.delete(db, item_id)
        return Message(message=f"{repo.label} deleted successfully")


@router.get("/classrooms", response_model=list[ClassroomRead], tags=["classrooms"])
def list_classrooms(
    dept: Optional[str] = None,
    search: Optional[str] = None,
    _: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
) -> list[Classroom]:
    return repository.classrooms.list(db, search=search, dept=dept)


@router.get("/labs", response_model=list[LabRead], tags=["labs"])
def list_labs(
    status: Optional[str] = None,
    dept: Optional[str] = None,
    search: Optional[str] = None,
    _: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
) -> list[Lab]:
    return repository.labs.list(db, search=search, status=status, dept=dept)


@router.patch("/labs/{lab_id}/status", response_model=LabRead, tags=["labs"])
def update_lab_status(
    lab_id: int,
    status_in: LabStatusUpdate,
    _: Principal = Depends(require_admin),
    db: Session = Depends(get_db),
) -> Lab:
    return repository.labs.update(db, lab_id, {"status": status_in.status})


@router.get("/buses", response_model=list[BusRead], tags=["buses"])
def list_buses(
    search: Optional[str] = None,
    _: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
) -> list[Bus]:
    return repository.buses.list(db, search=search)


@router.get("/cafeteria/menu", response_model=list[MenuItemRead], tags=["cafeteria"])
def list_menu(
    category: Optional[str] = None,
    availability: Optional[str] = None,
    search: Optional[str] = None,
    _: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
) -> list[MenuItem]:
    return repository.menu_items.list(db, search=search, category=category, availability=availability)


@router.get("/cafeteria/info", response_model=CafeteriaInfoRead, tags=["cafeteria"])
def get_cafeteria_info(
    _: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
) -> CafeteriaInfoRead:
    cached = cafeteria_info_cache.get(_INFO_KEY)
    if cached is not None:
        return cached
    row = db.query(CafeteriaInfo).order_by(CafeteriaInfo.id.desc()).first()
    info = CafeteriaInfoRead.model_validate(row) if row else DEFAULT_CAFETERIA_INFO
    cafeteria_info_cache[_INFO_KEY] = info
    return info


@router.put("/cafeteria/info", response_model=CafeteriaInfoRead, tags=["cafeteria"])
def update_cafeteria_info(
    info_in: CafeteriaInfoUpdate,
    _: Principal = Depends(require_admin),
    db: Session = Depends(get_db),
) -> CafeteriaInfo:
    row = db.query(CafeteriaInfo).order_by(CafeteriaInfo.id.desc()).first()
    if row is None:
        row = CafeteriaInfo(**info_in.model_dump())
        db.add(row)
    else:
        for key, value in info_in.model_dump().items():
            setattr(row, key, value)
    db.commit()
    db.refresh(row)
    cafeteria_info_cache.pop(_INFO_KEY, None)
    return row


register_crud("/classrooms", repository.classrooms, ClassroomCreate, ClassroomUpdate, ClassroomRead, "classrooms")
register_crud("/labs", repository.labs, LabCreate, LabUpdate, LabRead, "labs")
register_crud("/buses", repository.buses, BusCreate, BusUpdate, BusRead, "buses")
register_crud("/cafeteria/menu", repository.menu_items, MenuItemCreate, MenuItemUpdate, MenuItemRead, "cafeteria")
