import json

import pytest

from atlas_search.search import PipelineTap

from .conftest import Movie, RecordingExecutor


@pytest.mark.asyncio
async def test_records_pipeline_and_passes_results(tmp_path):
    inner = RecordingExecutor([{"title": "Alien"}])
    path = tmp_path / "log" / "pipelines.jsonl"
    tap = PipelineTap(inner, path)
    stages = [{"$search": {"text": {"path": "title", "query": "alien"}}}]

    results = await tap.run_pipeline(stages, Movie)
    await tap.run_pipeline(stages, Movie)

    assert [m.title for m in results] == ["Alien"]
    assert len(inner.calls) == 2

    lines = path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
    record = json.loads(lines[0])
    assert record["result_type"] == "Movie"
    assert record["stages"] == stages
    assert "logged_at" in record


@pytest.mark.asyncio
async def test_write_failure_does_not_block_search(tmp_path, caplog):
    # 디렉토리 경로에는 파일을 열 수 없음
    tap = PipelineTap(RecordingExecutor([{"title": "Alien"}]), tmp_path)

    results = await tap.run_pipeline([], Movie)

    assert len(results) == 1
    assert "Failed to log pipeline" in caplog.text
