# -*- coding: utf-8 -*-
"""Application constants."""

APP_NAME = "smartlex-core"
APP_VERSION = "0.1.0"

DEFAULT_SETTINGS_FILE = "settings.json"
DEFAULT_STORE_FILE = "smartlex-store.json"

HISTORY_CAPACITY = 100
COMPACT_WIDTH = 1024

LANGUAGES = ("zh", "en")

STORE_KEY_HISTORY = "history"
STORE_KEY_CURRENT = "current_analysis"
STORE_KEY_LIBRARY = "library"

MESSAGES = {
    "zh": {
        "label.home": "首页",
        "label.history": "历史记录",
        "label.library": "知识库",
        "label.settings": "设置",
        "notify.title": "分析完成",
        "notify.body": "\"{term}\" 的深度分析已就绪。",
        "toast.success": "深度分析已完成",
        "toast.failure": "分析失败，请检查网络连接。",
        "toast.pinned": "窗口已置顶",
        "toast.unpinned": "窗口置顶已取消",
        "toast.saved_to_library": "已保存到知识库",
    },
    "en": {
        "label.home": "Home",
        "label.history": "History",
        "label.library": "Library",
        "label.settings": "Settings",
        "notify.title": "Analysis complete",
        "notify.body": "The deep analysis of \"{term}\" is ready.",
        "toast.success": "Deep analysis completed",
        "toast.failure": "Analysis failed, please check your network connection.",
        "toast.pinned": "Window pinned on top",
        "toast.unpinned": "Window no longer pinned",
        "toast.saved_to_library": "Saved to library",
    },
}
