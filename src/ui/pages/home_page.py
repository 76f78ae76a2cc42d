"""首页."""

from __future__ import annotations

from typing import Optional

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import QHBoxLayout, QLabel, QPushButton, QVBoxLayout, QWidget

from src.services.auth_service import AuthService, Page
from src.ui.pages.base_page import BasePage
from src.utils.constants import APP_NAME

FEATURES = (
    ("🎨", "Professional Templates", "Gradient presets built for LinkedIn banners and posts."),
    ("✏️", "Live Editing", "Change text, fonts, sizes and alignment with instant preview."),
    ("⬇️", "Full-Size Export", "Download pixel-perfect PNG or JPG at LinkedIn dimensions."),
)


class HomePage(BasePage):
    """落地页：介绍和入口按钮."""

    page = Page.HOME

    def __init__(self, auth_service: AuthService, parent: Optional[QWidget] = None) -> None:
        super().__init__(auth_service, parent)
        self._setup_ui()

    def _setup_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(48, 48, 48, 48)
        layout.setSpacing(24)
        layout.addStretch()

        title = QLabel(f"<h1>{APP_NAME}</h1>")
        title.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(title)

        subtitle = QLabel("Create stunning LinkedIn banners and posts in minutes.")
        subtitle.setAlignment(Qt.AlignmentFlag.AlignCenter)
        subtitle.setStyleSheet("font-size: 16px; color: #4b5563;")
        layout.addWidget(subtitle)

        buttons = QHBoxLayout()
        buttons.addStretch()
        self._start_btn = QPushButton("Get Started")
        self._start_btn.setObjectName("primaryButton")
        self._start_btn.clicked.connect(self._on_get_started)
        buttons.addWidget(self._start_btn)

        self._designer_btn = QPushButton("Open Designer")
        self._designer_btn.clicked.connect(
            lambda: self.navigate_requested.emit(Page.DESIGNER, 0)
        )
        buttons.addWidget(self._designer_btn)
        buttons.addStretch()
        layout.addLayout(buttons)

        features = QHBoxLayout()
        features.setSpacing(16)
        for icon, heading, text in FEATURES:
            card = QLabel(f"<div style='font-size:28px'>{icon}</div><b>{heading}</b><br>{text}")
            card.setWordWrap(True)
            card.setAlignment(Qt.AlignmentFlag.AlignCenter)
            card.setObjectName("featureCard")
            card.setFixedWidth(260)
            features.addWidget(card)
        features.insertStretch(0)
        features.addStretch()
        layout.addLayout(features)
        layout.addStretch()

    def _on_get_started(self) -> None:
        target = Page.DESIGNER if self._auth.is_authenticated else Page.REGISTER
        self.navigate_requested.emit(target, 0)
