from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSetting(BaseSettings):
    log_level: str = 'DEBUG'
    api_prefix: str = '/api/v1'
    enable_file_logging: bool = False
    log_file_path: str = 'app.log'
    report_backend_url: str = 'http://weather_backend:8080/api'
    openweather_url: str = 'https://api.openweathermap.org/data/2.5'
    openweather_api_key: str = ''
    request_timeout: float = 10.0

    model_config = SettingsConfigDict(env_prefix='APP_')


app_settings = AppSetting()
