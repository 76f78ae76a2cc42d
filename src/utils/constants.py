"""应用常量定义."""

from pathlib import Path

# ===================
# 应用信息
# ===================
APP_NAME = "LinkedIn Design Studio"
APP_VERSION = "1.0.0"
APP_AUTHOR = "Yang"

# ===================
# 路径常量
# ===================
# 应用数据目录
APP_DATA_DIR = Path.home() / ".linkedin-design-studio"

# 本地存储文件（对应浏览器 localStorage）
LOCAL_STORAGE_PATH = APP_DATA_DIR / "local_storage.json"

# 日志目录
LOG_DIR = APP_DATA_DIR / "logs"

# 默认导出目录
DEFAULT_EXPORT_DIR = Path.home() / "Downloads"

# ===================
# API 设置
# ===================
DEFAULT_API_BASE = "http://localhost:5000"

API_DESIGN_ACCESS = "/api/user/design-access"
API_AUTH_LOGIN = "/api/auth/login"
API_AUTH_STATUS = "/api/auth/status"
API_AUTH_REGISTER = "/api/auth/register"

# ===================
# 本地存储键
# ===================
STORAGE_KEY_TOKEN = "userToken"
STORAGE_KEY_USER_INFO = "userInfo"
STORAGE_KEY_PENDING_REGISTRATION = "pendingRegistration"
STORAGE_KEY_REMEMBERED_EMAIL = "rememberedEmail"

# ===================
# 画布设置
# ===================
BANNER_WIDTH = 1584
BANNER_HEIGHT = 396
POST_WIDTH = 1200
POST_HEIGHT = 1200

# 预览缩放（只影响界面显示，不影响导出尺寸）
BANNER_DISPLAY_SCALE = 1.0
POST_DISPLAY_SCALE = 0.5

# 方向键每次移动的像素
NUDGE_STEP = 10

# 左/右对齐时距画布边缘的固定距离
ALIGN_INSET = 100

# 标题基线相对锚点的上移距离
HEADLINE_RISE = 20

# ===================
# 文字设置
# ===================
DEFAULT_HEADLINE = "Professional LinkedIn Designer"
DEFAULT_SUBTEXT = "Creating Impact Through Design"
DEFAULT_HEADLINE_SIZE = 36
DEFAULT_SUBTEXT_SIZE = 18
DEFAULT_FONT_FAMILY = "'Segoe UI', sans-serif"

# 滑块范围
HEADLINE_SIZE_RANGE = (20, 72)
SUBTEXT_SIZE_RANGE = (12, 36)

# 可选字体栈
FONT_FAMILIES = [
    "'Segoe UI', sans-serif",
    "Arial, sans-serif",
    "Georgia, serif",
    "'Times New Roman', serif",
    "'Courier New', monospace",
]

# ===================
# 主题颜色
# ===================
WHITE = "#ffffff"
DARK_TEXT_COLOR = "#1f2937"
MUTED_TEXT_COLOR = "#6b7280"

# ===================
# 导出设置
# ===================
EXPORT_FILE_PREFIX = "linkedin"
EXPORT_JPEG_QUALITY = 100

# ===================
# 注册设置
# ===================
MIN_PASSWORD_LENGTH = 8
MAX_SCREENSHOT_SIZE = 5 * 1024 * 1024  # 5MB

# ===================
# 跳转延迟（毫秒）
# ===================
REDIRECT_DELAY_SHORT = 1000
REDIRECT_DELAY_DEFAULT = 1500
REDIRECT_DELAY_LONG = 2000

# ===================
# UI 设置
# ===================
WINDOW_MIN_WIDTH = 1280
WINDOW_MIN_HEIGHT = 800
TOAST_DURATION = 3000
TOAST_DURATION_LONG = 4000
