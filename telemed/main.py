import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from telemed.core import config
from telemed.database import Base, engine, ensure_appointment_schema
from telemed.models import appointment, doctor, patient, speciality  # noqa: F401
from telemed.routes import appointment_routes, auth_routes

logging.basicConfig(
    level=config.LOG_LEVEL,
    format='[%(asctime)s] %(levelname)s %(name)s - %(message)s',
)

app = FastAPI(title='Telemed Appointments API')

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=['*'],
    allow_headers=['*'],
)

logger = logging.getLogger(__name__)


@app.on_event('startup')
def initialize_database() -> None:
    config.validate_runtime_config()
    try:
        Base.metadata.create_all(bind=engine)
        ensure_appointment_schema()
    except SQLAlchemyError:
        logger.exception('Database initialization failed. Check DATABASE_URL and database credentials.')


@app.get('/')
def root():
    return {'status': 'Telemed Appointments API Running'}


app.include_router(auth_routes.router, prefix='/auth')
app.include_router(appointment_routes.router, prefix='/appointments')
