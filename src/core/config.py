from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # 앱 설정
    APP_NAME: str = "art-transform"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"  # development, production

    # 서버 설정
    HOST: str = "0.0.0.0"
    PORT: int = 5001

    # DB 설정 (로컬: SQLite → 운영: PostgreSQL)
    DATABASE_URL: str = "sqlite:///./art_transform.db"

    # 세션 / JWT 설정
    SESSION_SECRET: str = "dev-secret-key-change-in-production"
    JWT_ALGORITHM: str = "HS256"
    SESSION_COOKIE_NAME: str = "sid"
    SESSION_TTL_DAYS: int = 7
    OAUTH_STATE_COOKIE_NAME: str = "oauth_state"
    OAUTH_STATE_TTL_MINUTES: int = 10

    # Google OAuth
    GOOGLE_CLIENT_ID: str = ""
    GOOGLE_CLIENT_SECRET: str = ""
    OAUTH_CALLBACK_URL: str = "http://localhost:5001/api/auth/google/callback"
    POST_LOGIN_REDIRECT: str = "/tools/convert-photo-to-painting-online-free"

    # 관리자
    ADMIN_USERNAME: str = "admin"
    ADMIN_PASSWORD_HASH: str = ""
    ADMIN_TOKEN_EXPIRE_MINUTES: int = 12 * 60

    # 크레딧
    DEFAULT_CREDITS: int = 3
    TRANSFORM_CREDIT_COST: int = 1

    # Gemini
    GOOGLE_API_KEY: str = ""
    GEMINI_IMAGE_MODEL: str = "gemini-2.5-flash-image"
    GEMINI_ASPECT_RATIO: str = "3:4"

    # ImgBB (결과 이미지 외부 호스팅)
    IMGBB_API_KEY: str = ""

    # Medusa
    MEDUSA_BACKEND_URL: str = ""
    MEDUSA_PUBLISHABLE_KEY: str = ""
    MEDUSA_REGION_ID: str = ""
    MEDUSA_ADMIN_EMAIL: str = ""
    MEDUSA_ADMIN_PASSWORD: str = ""
    MEDUSA_TIMEOUT_SECONDS: int = 30
    CHECKOUT_BASE_URL: str = "https://photos-to-paintings.com"

    # 갤러리
    GALLERY_DIR: str = "./gallery"
    GALLERY_BASE_URL: str = "https://ai.art-and-see.com/gallery"

    # 업로드 제한
    MAX_IMAGE_DIMENSION: int = 2048
    MAX_UPLOAD_BYTES: int = 25 * 1024 * 1024

    # 파생 값 (읽기 전용)
    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

    @property
    def cookie_secure(self) -> bool:
        return self.is_production

    @property
    def gemini_configured(self) -> bool:
        return bool(self.GOOGLE_API_KEY)

    @property
    def imgbb_configured(self) -> bool:
        return bool(self.IMGBB_API_KEY)

    @property
    def medusa_configured(self) -> bool:
        return bool(self.MEDUSA_BACKEND_URL)

    @property
    def google_oauth_configured(self) -> bool:
        return bool(self.GOOGLE_CLIENT_ID and self.GOOGLE_CLIENT_SECRET)

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
