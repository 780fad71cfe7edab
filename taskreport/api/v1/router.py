from fastapi import APIRouter

from taskreport.api.v1.endpoints import auth, developers, admins, tasks, admin_tasks, reports

api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
api_router.include_router(developers.router, prefix="/developers", tags=["Developers"])
api_router.include_router(admins.router, prefix="/admins", tags=["Admins"])
api_router.include_router(tasks.router, prefix="/tasks", tags=["Tasks"])
api_router.include_router(admin_tasks.router, prefix="/admin/tasks", tags=["Admin Tasks"])
api_router.include_router(reports.router, prefix="/reports", tags=["Reports"])
