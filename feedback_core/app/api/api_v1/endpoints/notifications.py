from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from feedback_core.app import crud, models, schemas
from feedback_core.app.api import deps
from feedback_core.app.materialize import notification_schema_from_orm
from feedback_core.app.user_permission import check_notification_access

router = APIRouter()


@router.get("/", response_model=schemas.NotificationList)
def get_notifications(
    *,
    db: Session = Depends(deps.get_db),
    current_user: models.User = Depends(deps.get_current_active_user),
    page_params: deps.PageParams = Depends(),
    unread_only: bool = False,
) -> Any:
    notifications, total_items, total_pages = crud.notification.get_page(
        db,
        receiver_id=current_user.id,
        page=page_params.page,
        limit=page_params.limit,
        unread_only=unread_only,
    )
    return schemas.NotificationList(
        notifications=[notification_schema_from_orm(n) for n in notifications],
        pagination=schemas.Pagination(
            current=page_params.page, total=total_pages, total_items=total_items
        ),
    )


@router.get("/unread-count", response_model=schemas.UnreadCount)
def get_unread_count(
    *,
    db: Session = Depends(deps.get_db),
    current_user: models.User = Depends(deps.get_current_active_user),
) -> Any:
    return schemas.UnreadCount(
        unread_count=crud.notification.get_unread_count(
            db, receiver_id=current_user.id
        )
    )


@router.patch("/read-all", response_model=schemas.GenericResponse)
def mark_all_notifications_read(
    *,
    db: Session = Depends(deps.get_db),
    current_user: models.User = Depends(deps.get_current_active_user),
) -> Any:
    crud.notification.mark_all_read(db, receiver_id=current_user.id)
    return schemas.GenericResponse(msg="All notifications marked as read")


@router.patch("/{id}/read", response_model=schemas.Notification)
def mark_notification_read(
    *,
    db: Session = Depends(deps.get_db),
    current_user: models.User = Depends(deps.get_current_active_user),
    id: int,
) -> Any:
    notification = check_notification_access(
        current_user, crud.notification.get_live(db, id=id)
    )
    return notification_schema_from_orm(
        crud.notification.mark_read(db, db_obj=notification)
    )


@router.delete("/{id}", response_model=schemas.GenericResponse)
def delete_notification(
    *,
    db: Session = Depends(deps.get_db),
    current_user: models.User = Depends(deps.get_current_active_user),
    id: int,
) -> Any:
    check_notification_access(current_user, crud.notification.get_live(db, id=id))
    crud.notification.remove(db, id=id)
    return schemas.GenericResponse(msg="Notification deleted successfully")
