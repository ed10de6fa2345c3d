"""
Tests for multi-source concatenation
"""

import io

import pytest

from tablestream import InvalidField, MismatchedHeaders, Pipeline, Row, SourceError


def ab_pipeline(*rows):
    return Pipeline.from_rows(["A", "B"], [list(row) for row in rows])


class TestConcat:
    """Test Pipeline.from_pipelines"""

    def test_rows_in_source_order(self):
        """Test that source 1 is exhausted before source 2 starts"""
        pipeline = Pipeline.from_pipelines(
            [ab_pipeline(("1", "2"), ("3", "4")), ab_pipeline(("5", "6"))]
        )

        assert pipeline.headers.names == ["A", "B"]
        assert list(pipeline) == [Row.of("1", "2"), Row.of("3", "4"), Row.of("5", "6")]

    def test_mismatched_headers(self):
        """Test that a third source with other headers stops the chain"""
        pulled = []

        def countries():
            pulled.append("read")
            yield ["1", "Norway"]

        pipeline = Pipeline.from_pipelines(
            [
                ab_pipeline(("1", "2")),
                ab_pipeline(("3", "4")),
                Pipeline.from_rows(["ID", "Country"], countries()),
            ]
        )

        items = list(pipeline)

        assert items[:2] == [Row.of("1", "2"), Row.of("3", "4")]
        assert len(items) == 3
        error = items[2]
        assert isinstance(error, MismatchedHeaders)
        assert error.source == 2
        assert error.expected == ("A", "B")
        assert error.found == ("ID", "Country")
        assert pulled == []

    def test_mismatch_stops_later_sources(self):
        """Test that sources after a mismatch are not read"""
        pipeline = Pipeline.from_pipelines(
            [ab_pipeline(("1", "2")), Pipeline.from_rows(["X"], [["x"]]), ab_pipeline(("3", "4"))]
        )

        items = list(pipeline)

        assert items == [Row.of("1", "2"), MismatchedHeaders(("A", "B"), ("X",), source=1)]

    def test_errors_tagged_with_source_index(self):
        """Test that each source's errors carry its index"""
        first = Pipeline.from_reader(io.StringIO("A,B\n1,2\n3\n"))
        second = Pipeline.from_reader(io.StringIO("A,B\n4\n5,6\n"))

        items = list(Pipeline.from_pipelines([first, second]))

        errors = [item for item in items if isinstance(item, SourceError)]
        assert [error.source for error in errors] == [0, 1]

    def test_downstream_errors_tagged_with_active_source(self):
        """Test that stages after the concatenation tag the active source"""

        def digits(value):
            if not value.isdigit():
                raise InvalidField(value)
            return value

        pipeline = Pipeline.from_pipelines(
            [ab_pipeline(("1", "x")), ab_pipeline(("2", "y"))]
        ).map_col("B", digits)

        items = list(pipeline)

        assert items == [InvalidField("x", source=0), InvalidField("y", source=1)]

    def test_stages_on_inner_pipelines(self):
        """Test that each inner pipeline runs its own stages"""
        first = ab_pipeline(("1", "2")).map_col("A", lambda value: value * 2)
        second = ab_pipeline(("3", "4"))

        assert list(Pipeline.from_pipelines([first, second])) == [
            Row.of("11", "2"),
            Row.of("3", "4"),
        ]

    def test_empty_list(self):
        """Test that at least one pipeline is needed"""
        with pytest.raises(ValueError):
            Pipeline.from_pipelines([])


class TestConcatCleanup:
    """Test that every source file is released"""

    @pytest.fixture
    def write_csv(self, tmp_path):
        def write(name, text):
            path = tmp_path / name
            path.write_text(text)
            return Pipeline.from_path(path)

        return write

    def test_mismatch_closes_unread_sources(self, write_csv):
        """Test that a source rejected for its headers is closed"""
        first = write_csv("a.csv", "A,B\n1,2\n")
        second = write_csv("b.csv", "A,B\n3,4\n")
        third = write_csv("c.csv", "ID,Country\n1,Norway\n")

        items = list(Pipeline.from_pipelines([first, second, third]))

        assert isinstance(items[-1], MismatchedHeaders)
        for pipeline in (first, second, third):
            assert pipeline.tail.reader._handle.closed

    def test_early_stop_closes_every_source(self, write_csv):
        """Test that abandoning the stream closes sources not yet reached"""
        first = write_csv("a.csv", "A,B\n1,2\n3,4\n")
        second = write_csv("b.csv", "A,B\n5,6\n")

        with Pipeline.from_pipelines([first, second]).build() as rows:
            assert next(rows) == Row.of("1", "2")

        assert first.tail.reader._handle.closed
        assert second.tail.reader._handle.closed

    def test_close_without_running(self, write_csv):
        """Test that closing an unstarted pipeline releases its sources"""
        first = write_csv("a.csv", "A,B\n1,2\n")
        second = write_csv("b.csv", "A,B\n3,4\n")

        Pipeline.from_pipelines([first, second]).close()

        assert first.tail.reader._handle.closed
        assert second.tail.reader._handle.closed
