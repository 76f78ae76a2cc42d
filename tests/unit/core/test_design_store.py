"""设计状态容器单元测试."""

from __future__ import annotations

import pytest

from src.core.design_store import DesignStore
from src.models.design_state import NudgeDirection, TextAlign, TextField
from src.models.design_template import DesignMode
from src.utils.exceptions import InvalidTemplateError


@pytest.fixture
def store() -> DesignStore:
    return DesignStore()


class Recorder:
    """记录监听回调."""

    def __init__(self) -> None:
        self.calls = []

    def __call__(self, state, image) -> None:
        self.calls.append((state, image))


class TestInit:
    """初始化测试."""

    def test_renders_once(self, store):
        assert store.render_count == 1
        assert store.image.size == (1584, 396)

    def test_defaults(self, store):
        assert store.mode == DesignMode.BANNER
        assert store.active_template_id == 1
        assert len(store.templates) == 6
        assert store.display_size == (1584, 396)


class TestMutations:
    """修改操作测试."""

    def test_every_mutation_rerenders(self, store):
        recorder = Recorder()
        store.add_listener(recorder)

        store.set_text(TextField.HEADLINE, "Hello")
        store.set_font_size(TextField.SUBTEXT, 24)
        store.set_font_family("Georgia, serif")
        store.set_alignment(TextAlign.LEFT)
        store.nudge(NudgeDirection.UP)
        store.apply_theme("light")
        store.select_template(2)

        assert len(recorder.calls) == 7
        assert store.render_count == 8
        state, image = recorder.calls[-1]
        assert state is store.state
        assert image is store.image

    def test_set_mode(self, store):
        store.nudge(NudgeDirection.RIGHT)
        store.select_template(5)
        store.set_mode(DesignMode.POST)

        assert store.mode == DesignMode.POST
        assert store.active_template_id == 1
        assert store.state.offset_x == 0
        assert store.image.size == (1200, 1200)
        assert store.display_size == (600, 600)
        assert [t.name for t in store.templates][0] == "Bold"

    def test_same_mode_no_render(self, store):
        recorder = Recorder()
        store.add_listener(recorder)
        store.set_mode(DesignMode.BANNER)
        assert recorder.calls == []
        assert store.render_count == 1

    def test_set_mode_accepts_value(self, store):
        store.set_mode("post")
        assert store.mode == DesignMode.POST

    def test_select_template_object(self, store):
        template = store.templates[2]
        store.select_template(template)
        assert store.active_template_id == 3
        assert store.state.theme.colors == template.gradient

    def test_select_unknown_template(self, store):
        store.set_mode(DesignMode.POST)
        with pytest.raises(InvalidTemplateError):
            store.select_template(5)
        assert store.active_template_id == 1

    def test_image_reflects_latest_state(self, store):
        store.apply_theme("light")
        assert store.image.getpixel((0, 0)) == (255, 255, 255, 255)


class TestListeners:
    """监听者测试."""

    def test_remove_listener(self, store):
        recorder = Recorder()
        store.add_listener(recorder)
        store.add_listener(recorder)
        store.render()
        store.remove_listener(recorder)
        store.render()
        assert len(recorder.calls) == 1

    def test_listener_error_does_not_stop_others(self, store):
        def broken(state, image):
            raise RuntimeError("boom")

        recorder = Recorder()
        store.add_listener(broken)
        store.add_listener(recorder)
        store.nudge(NudgeDirection.DOWN)
        assert len(recorder.calls) == 1
