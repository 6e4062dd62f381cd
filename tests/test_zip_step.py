import json

import pytest

from zipstrict import (
    LengthMismatchError,
    Map,
    Mismatch,
    Pipeline,
    Source,
    Zip,
    ZipConfig,
)


def write_jsonl(path, records):
    path.write_text("".join(json.dumps(r) + "\n" for r in records), encoding="utf-8")
    return path


def run_step(step):
    return list(step.process(iter([])))


class TestZipStep:
    """Zip combines record streams side by side."""

    def test_merge(self):
        step = Zip(
            Source.list([{"q": "Q1"}, {"q": "Q2"}]),
            Source.list([{"a": "A1"}, {"a": "A2"}]),
            strict=True,
        )
        assert run_step(step) == [{"q": "Q1", "a": "A1"}, {"q": "Q2", "a": "A2"}]

    def test_merge_later_source_wins(self):
        step = Zip(Source.list([{"k": 1, "x": 0}]), Source.list([{"k": 2}]))
        assert run_step(step) == [{"k": 2, "x": 0}]

    def test_nested(self):
        step = Zip(
            Source.list([{"text": "good"}]),
            Source.list([{"text": "bad"}]),
            output_format="nested",
        )
        assert run_step(step) == [
            {"source_1": {"text": "good"}, "source_2": {"text": "bad"}}
        ]

    def test_non_strict_truncates(self):
        step = Zip(Source.list([{"a": 1}, {"a": 2}]), Source.list([{"b": 1}]))
        assert step.strict is False
        assert run_step(step) == [{"a": 1, "b": 1}]

    def test_strict_mismatch_after_matching_rows(self, log_messages):
        step = Zip(
            Source.list([{"a": 1}, {"a": 2}]).as_step("left"),
            Source.list([{"b": 1}]).as_step("right"),
            strict=True,
        )
        rows = iter(step.process(iter([])))
        assert next(rows) == {"a": 1, "b": 1}
        with pytest.raises(LengthMismatchError) as excinfo:
            next(rows)
        assert excinfo.value.position == 2
        assert excinfo.value.mismatch is Mismatch.TOO_SHORT
        assert "Zip: argument 2 is too short (right vs left) after 1 rows" in log_messages

    def test_strict_from_config(self):
        step = Zip(
            Source.list([{"a": 1}]),
            Source.list([{"b": 1}, {"b": 2}]),
            config=ZipConfig(strict=True),
        )
        with pytest.raises(LengthMismatchError, match="argument 2 is too long"):
            run_step(step)

    def test_explicit_strict_overrides_config(self):
        step = Zip(
            Source.list([{"a": 1}]),
            Source.list([{"b": 1}, {"b": 2}]),
            strict=False,
            config=ZipConfig(strict=True),
        )
        assert run_step(step) == [{"a": 1, "b": 1}]

    def test_requires_source(self):
        with pytest.raises(ValueError, match="at least one source"):
            Zip()

    def test_rejects_non_step_source(self):
        with pytest.raises(TypeError, match="Zip source 2 must be a Step, got list"):
            Zip(Source.list([{"a": 1}]), [{"b": 1}])

    def test_invalid_output_format(self):
        with pytest.raises(ValueError, match="Invalid output_format"):
            Zip(Source.list([]), output_format="wide")

    def test_ignores_upstream_records(self):
        step = Zip(Source.list([{"a": 1}]))
        assert list(step.process(iter([{"ignored": True}]))) == [{"a": 1}]


class TestZipFiles:
    """Zipping file sources reads no more than needed."""

    def test_pairs_files(self, tmp_path):
        questions = write_jsonl(tmp_path / "q.jsonl", [{"q": "Q1"}, {"q": "Q2"}])
        answers = tmp_path / "a.txt"
        answers.write_text("A1\nA2\n", encoding="utf-8")

        pipeline = Zip(
            Source.jsonl(questions),
            Source.txt(answers, text_column="a"),
            strict=True,
        ) >> Map(lambda r: {"pair": f"{r['q']}={r['a']}"})

        assert pipeline.run() == [{"pair": "Q1=A1"}, {"pair": "Q2=A2"}]

    def test_short_file_bounds_reads(self, tmp_path):
        long_source = Source.jsonl(
            write_jsonl(tmp_path / "long.jsonl", [{"n": i} for i in range(100)])
        )
        short_source = Source.jsonl(
            write_jsonl(tmp_path / "short.jsonl", [{"m": i} for i in range(3)])
        )

        with pytest.raises(LengthMismatchError, match="argument 2 is too short"):
            run_step(Zip(long_source, short_source, strict=True))

        assert long_source.records_read == 4
        assert short_source.records_read == 3


class TestPipelineRun:
    """Runner behaviour on zipped pipelines."""

    def make_pipeline(self):
        return Pipeline([
            Zip(
                Source.list([{"a": i} for i in range(5)]),
                Source.list([{"b": i * 10} for i in range(5)]),
                strict=True,
            ).as_step("pairs"),
            Map(lambda r: {"total": r["a"] + r["b"]}).as_step("totals"),
        ])

    def test_run(self, log_messages):
        records = self.make_pipeline().run()
        assert [r["total"] for r in records] == [0, 11, 22, 33, 44]
        assert "Step 0 (pairs): 0 → 5 records" in " ".join(log_messages)

    def test_limit_reads_lazily(self, counting):
        left = counting([{"a": i} for i in range(100)])
        pipeline = Zip(
            Source.iterable(left),
            Source.list([{"b": i} for i in range(100)]),
            strict=True,
        ) >> Map(lambda r: r)

        records = pipeline.run(limit=2)

        assert len(records) == 2
        assert left.pulled == 2

    def test_limit_hides_later_mismatch(self):
        pipeline = Zip(
            Source.list([{"a": 1}, {"a": 2}]),
            Source.list([{"b": 1}]),
            strict=True,
        ) >> Map(lambda r: r)
        assert pipeline.run(limit=1) == [{"a": 1, "b": 1}]

    def test_stop_after_name(self):
        records = self.make_pipeline().run(stop_after="pairs")
        assert records[0] == {"a": 0, "b": 0}

    def test_stop_after_index(self):
        records = self.make_pipeline().run(stop_after=0)
        assert len(records) == 5
        assert "total" not in records[0]

    def test_stop_after_unknown(self):
        with pytest.raises(ValueError, match="Unknown step"):
            self.make_pipeline().run(stop_after="missing")

    def test_stop_after_out_of_range(self):
        with pytest.raises(ValueError, match="out of range"):
            self.make_pipeline().run(stop_after=7)

    def test_mismatch_propagates(self):
        pipeline = Zip(
            Source.list([{"a": 1}]),
            Source.list([{"b": 1}, {"b": 2}]),
            strict=True,
        ) >> Map(lambda r: r)
        with pytest.raises(LengthMismatchError):
            pipeline.run()

    def test_rshift_flattens(self):
        first = Source.list([{"a": 1}])
        pipeline = first >> Map(lambda r: r)
        extended = pipeline >> (Map(lambda r: r) >> Map(lambda r: r))
        assert len(extended.steps) == 4


class TestStepComposition:
    """Pipelines compose lazily and carry step names."""

    def test_process_reads_nothing_until_iterated(self, counting):
        left = counting([{"a": i} for i in range(3)])
        pipeline = Zip(Source.iterable(left), Source.list([{"b": 0}] * 3)) >> Map(lambda r: r)

        rows = iter(pipeline.process(iter([])))
        assert left.pulled == 0
        next(rows)
        assert left.pulled == 1

    def test_default_name_is_class_name(self):
        assert Map(lambda r: r).name == "Map"
        assert Map(lambda r: r).as_step("identity").name == "identity"
