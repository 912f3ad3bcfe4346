"""
Per-user settings endpoints.
"""

from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.api.dependencies import get_current_user_id
from app.db.session import get_db
from app.schemas.benchmarks import BenchmarkResponse, BenchmarkUpdate
from app.schemas.settings import RigidityResponse, RigidityUpdate
from app.services.settings_service import SettingsService

router = APIRouter()


@router.get("/rigidity", summary="Get plan rigidity.", response_model=RigidityResponse, )
def get_rigidity(db: Session = Depends(get_db), user_id: int = Depends(get_current_user_id), ):
    service = SettingsService(db)
    return service.get_rigidity(user_id)


@router.put("/rigidity", summary="Set plan rigidity.", response_model=RigidityResponse, )
def set_rigidity(data: RigidityUpdate, db: Session = Depends(get_db), user_id: int = Depends(get_current_user_id), ):
    service = SettingsService(db)
    return service.set_rigidity(user_id, data)


@router.get("/benchmarks", summary="Get benchmarks.", response_model=BenchmarkResponse, )
def get_benchmarks(db: Session = Depends(get_db), user_id: int = Depends(get_current_user_id), ):
    service = SettingsService(db)
    return service.get_benchmarks(user_id)


@router.put("/benchmarks", summary="Replace benchmarks.", response_model=BenchmarkResponse, )
def put_benchmarks(data: BenchmarkUpdate, db: Session = Depends(get_db), user_id: int = Depends(get_current_user_id), ):
    """Time fields accept seconds or ``m:ss`` / ``h:mm:ss`` strings.

    A ``swim_pr`` such as "400m in 6:20" fills the matching swim field
    unless that field is given explicitly.
    """
    service = SettingsService(db)
    return service.put_benchmarks(user_id, data)
