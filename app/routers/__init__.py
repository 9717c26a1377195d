from .auth import router as auth_router
from .comments import router as comments_router
from .follows import router as follows_router
from .likes import router as likes_router
from .posts import router as posts_router
from .reports import router as reports_router
from .upload import router as upload_router
from .users import router as users_router

routes = [
    auth_router,
    posts_router,
    comments_router,
    likes_router,
    follows_router,
    reports_router,
    users_router,
    upload_router,
]
