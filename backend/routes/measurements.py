# backend/routes/measurements.py
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from database import get_db
from models.measurement import MeasurementProfile
from models.users import User
from schemas.measurement import MeasurementProfileCreate, MeasurementProfileOut
from utils.audit import write_log
from utils.tokenJWT import get_current_user

router = APIRouter(prefix="/measurements", tags=["Measurements"])


# List the logged-in user's saved measurement profiles
@router.get("", response_model=List[MeasurementProfileOut])
def list_profiles(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return db.query(MeasurementProfile).filter(
        MeasurementProfile.user_id == current_user.id
    ).order_by(MeasurementProfile.id).all()


# Save a new profile; a new default replaces the previous default of the same garment type
@router.post("", response_model=MeasurementProfileOut, status_code=status.HTTP_201_CREATED)
def create_profile(
    payload: MeasurementProfileCreate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    if payload.is_default:
        db.query(MeasurementProfile).filter(
            MeasurementProfile.user_id == current_user.id,
            MeasurementProfile.garment_type == payload.garment_type,
            MeasurementProfile.is_default == True,  # noqa: E712
        ).update({MeasurementProfile.is_default: False}, synchronize_session=False)

    profile = MeasurementProfile(
        user_id=current_user.id,
        profile_name=payload.profile_name.strip(),
        garment_type=payload.garment_type,
        measurements=payload.measurements.model_dump(),
        is_default=payload.is_default,
    )
    db.add(profile)
    db.commit()
    db.refresh(profile)

    write_log(db, user_id=current_user.id, action="MEASUREMENT_CREATE", resource="measurements",
              status="SUCCESS", ip=request.client.host, meta={"profile_id": profile.id})
    return profile


@router.delete("/{profile_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_profile(
    profile_id: int,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    profile = db.query(MeasurementProfile).filter(
        MeasurementProfile.id == profile_id,
        MeasurementProfile.user_id == current_user.id,
    ).first()
    if not profile:
        raise HTTPException(status_code=404, detail="Measurement profile not found")

    db.delete(profile)
    db.commit()
    write_log(db, user_id=current_user.id, action="MEASUREMENT_DELETE", resource="measurements",
              status="SUCCESS", ip=request.client.host, meta={"profile_id": profile_id})
