"""Tests for the render pipeline ordering, wrapping and cleanup contract."""

from __future__ import annotations

import json
import logging
import shutil
from pathlib import Path

import pytest

from donegraph.core import RenderConfig, RenderPipeline
from donegraph.errors import (
    ArtifactIOError,
    CleanupError,
    DonenessOutOfRangeError,
    GraphDecodeError,
    PipelineError,
    RendererError,
    iter_error_chain,
)
from donegraph.renderers import PERMISSION_HINT


def _config(tmp_path: Path, input_path: Path, **kwargs) -> RenderConfig:
    return RenderConfig(
        input_path=input_path,
        temp_path=tmp_path / "temp.gv",
        output_path=tmp_path / "output.png",
        **kwargs,
    )


class RecordingRenderer:
    def __init__(self, payload: bytes = b"\x89PNG fake"):
        self.payload = payload
        self.calls: list[tuple[Path, str]] = []

    def __call__(self, source_path: Path) -> bytes:
        self.calls.append((source_path, source_path.read_text(encoding="utf-8")))
        return self.payload


def test_run_renders_and_removes_temp_file(tmp_path: Path, graph_file: Path) -> None:
    renderer = RecordingRenderer()
    config = _config(tmp_path, graph_file)

    output_path = RenderPipeline(config, renderer=renderer).run()

    assert output_path == config.output_path
    assert output_path.read_bytes() == b"\x89PNG fake"
    assert not config.temp_path.exists()

    assert len(renderer.calls) == 1
    source_path, source_text = renderer.calls[0]
    assert source_path == config.temp_path
    assert source_text.startswith("digraph G {\nnode [colorscheme=rdylgn10]\n")
    assert '\t"A" [label="Task A\\ndesc",color="1"]\n' in source_text
    assert '\t"B" [label="Task B\\nmore",color="10"]\n' in source_text
    assert '\t"A" -> "B"\n' in source_text
    assert source_text.rstrip().endswith("}")


def test_generate_source_does_not_touch_disk(tmp_path: Path, graph_file: Path) -> None:
    renderer = RecordingRenderer()
    config = _config(tmp_path, graph_file)

    source = RenderPipeline(config, renderer=renderer).generate_source()

    assert source.startswith("digraph G {")
    assert renderer.calls == []
    assert not config.temp_path.exists()
    assert not config.output_path.exists()


def test_decode_failure_is_wrapped(tmp_path: Path) -> None:
    bad_input = tmp_path / "bad.json"
    bad_input.write_text('{"nodes": "oops"}', encoding="utf-8")
    renderer = RecordingRenderer()

    with pytest.raises(PipelineError) as exc_info:
        RenderPipeline(_config(tmp_path, bad_input), renderer=renderer).run()

    assert isinstance(exc_info.value.__cause__, GraphDecodeError)
    assert renderer.calls == []


def test_out_of_range_doneness_aborts_before_writing(tmp_path: Path) -> None:
    input_path = tmp_path / "graph.json"
    input_path.write_text(
        json.dumps(
            {"nodes": [{"short_code": "A", "text": "t", "description": "d", "doneness": 101}], "dependencies": []}
        ),
        encoding="utf-8",
    )
    config = _config(tmp_path, input_path)
    renderer = RecordingRenderer()

    with pytest.raises(PipelineError) as exc_info:
        RenderPipeline(config, renderer=renderer).run()

    cause = exc_info.value.__cause__
    assert isinstance(cause, DonenessOutOfRangeError)
    assert cause.doneness == 101
    assert not config.temp_path.exists()
    assert renderer.calls == []


def test_renderer_failure_is_wrapped_and_no_output(tmp_path: Path, graph_file: Path) -> None:
    def failing_renderer(source_path: Path) -> bytes:
        raise RendererError("boom", stderr="syntax error")

    config = _config(tmp_path, graph_file)
    with pytest.raises(PipelineError) as exc_info:
        RenderPipeline(config, renderer=failing_renderer).run()

    assert isinstance(exc_info.value.__cause__, RendererError)
    assert not config.output_path.exists()


def test_temp_write_failure_carries_permission_hint(tmp_path: Path, graph_file: Path) -> None:
    occupied = tmp_path / "temp.gv"
    occupied.mkdir()
    renderer = RecordingRenderer()

    with pytest.raises(PipelineError) as exc_info:
        RenderPipeline(_config(tmp_path, graph_file), renderer=renderer).run()

    assert "暫存" in str(exc_info.value)
    io_error = exc_info.value.__cause__
    assert isinstance(io_error, ArtifactIOError)
    assert PERMISSION_HINT in str(io_error)
    assert isinstance(io_error.__cause__, OSError)
    assert renderer.calls == []


def test_temp_file_in_missing_directory_is_not_created(tmp_path: Path, graph_file: Path) -> None:
    missing_dir = tmp_path / "missing"
    config = RenderConfig(
        input_path=graph_file,
        temp_path=missing_dir / "temp.gv",
        output_path=tmp_path / "output.png",
    )

    with pytest.raises(PipelineError) as exc_info:
        RenderPipeline(config, renderer=RecordingRenderer()).run()

    assert isinstance(exc_info.value.__cause__, ArtifactIOError)
    assert not missing_dir.exists()


def test_output_write_failure_carries_permission_hint(tmp_path: Path, graph_file: Path) -> None:
    config = RenderConfig(
        input_path=graph_file,
        temp_path=tmp_path / "temp.gv",
        output_path=tmp_path / "output.png",
    )
    config.output_path.mkdir()

    with pytest.raises(PipelineError) as exc_info:
        RenderPipeline(config, renderer=RecordingRenderer()).run()

    io_error = exc_info.value.__cause__
    assert isinstance(io_error, ArtifactIOError)
    assert PERMISSION_HINT in str(io_error)
    assert isinstance(io_error.__cause__, OSError)


def test_generate_source_logs_summary(
    tmp_path: Path, graph_file: Path, caplog: pytest.LogCaptureFixture
) -> None:
    with caplog.at_level(logging.DEBUG):
        RenderPipeline(_config(tmp_path, graph_file), renderer=RecordingRenderer()).generate_source()

    assert any("2 個節點，1 條依賴邊" in record.getMessage() for record in caplog.records)


def test_cleanup_failure_reported_after_output_written(tmp_path: Path, graph_file: Path) -> None:
    def renderer_removing_temp(source_path: Path) -> bytes:
        source_path.unlink()
        return b"image"

    config = _config(tmp_path, graph_file)
    with pytest.raises(CleanupError) as exc_info:
        RenderPipeline(config, renderer=renderer_removing_temp).run()

    assert isinstance(exc_info.value, PipelineError)
    assert config.output_path.read_bytes() == b"image"
    assert isinstance(exc_info.value.__cause__, OSError)


@pytest.mark.skipif(shutil.which("false") is None, reason="requires POSIX 'false'")
def test_nonzero_exit_from_real_subprocess(tmp_path: Path, graph_file: Path) -> None:
    config = _config(tmp_path, graph_file, layout_engine="false")

    with pytest.raises(PipelineError) as exc_info:
        RenderPipeline(config).run()

    chain = list(iter_error_chain(exc_info.value))
    assert any(isinstance(error, RendererError) for error in chain)
    assert not config.output_path.exists()


def test_missing_renderer_executable(tmp_path: Path, graph_file: Path) -> None:
    config = _config(tmp_path, graph_file, layout_engine="donegraph-no-such-renderer")

    with pytest.raises(PipelineError) as exc_info:
        RenderPipeline(config).run()

    renderer_error = exc_info.value.__cause__
    assert isinstance(renderer_error, RendererError)
    assert "PATH" in str(renderer_error)


@pytest.mark.skipif(shutil.which("dot") is None, reason="requires Graphviz")
def test_end_to_end_with_graphviz(tmp_path: Path, graph_file: Path) -> None:
    output_path = RenderPipeline(_config(tmp_path, graph_file)).run()
    assert output_path.read_bytes().startswith(b"\x89PNG")
