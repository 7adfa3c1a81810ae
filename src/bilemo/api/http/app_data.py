from dataclasses import dataclass

from src.bilemo.core.services import (
    DbSessionService,
    JwtGeneratorService,
    JwtVerificationService,
    RedisService,
)
from src.bilemo.core.storage import TagAwareCache


@dataclass
class ApplicationDependencies:
    database_service: DbSessionService
    redis_service: RedisService
    tag_cache: TagAwareCache
    jwt_generation_service: JwtGeneratorService
    jwt_verify_service: JwtVerificationService
