"""
Tests filter objects, parsing and pipelines
"""

import logging

import numpy as np
import pytest

from rasterstag import BoundaryPolicy, DegenerateRangeError, Image
from rasterstag.filters import (
    Add,
    EdgeDetect,
    Filter,
    FilterContext,
    FilterPipeline,
    Gradient,
    Grayscale,
    MaxRange,
    FILTER_REGISTRY,
    edge_detect,
    gradient_horizontal,
    grayscale,
)


class TestParsing:
    """Tests the compact filter syntax."""

    def test_registry(self):
        for name in ("Grayscale", "gradient", "EdgeDetect", "maxrange", "add"):
            assert name in FILTER_REGISTRY

    def test_aliases(self):
        assert isinstance(Filter.parse("gray"), Grayscale)
        assert isinstance(Filter.parse("edges"), EdgeDetect)
        assert isinstance(Filter.parse("stretch"), MaxRange)
        assert Filter.parse("vgrad") == Gradient(kernel="vertical")
        assert Filter.parse("hgrad") == Gradient(kernel="horizontal")
        assert isinstance(Filter.parse("compose"), Add)

    def test_positional_and_keyword_args(self):
        parsed = Filter.parse("gradient horizontal wrap")
        assert parsed.kernel == "horizontal"
        assert parsed.policy is BoundaryPolicy.WRAP
        parsed = Filter.parse("hgrad policy=BLACK")
        assert parsed.kernel == "horizontal"
        assert parsed.policy is BoundaryPolicy.BLACK
        assert Filter.parse("maxrange strict=false").strict is False

    def test_legacy_syntax(self):
        assert Filter.parse("maxrange(false)").strict is False
        parsed = Filter.parse("gradient(kernel=horizontal, policy=gray)")
        assert parsed.policy is BoundaryPolicy.GRAY

    def test_kernel_weights(self):
        parsed = Filter.parse("gradient kernel=0,0,0,-1,0,1,0,0,0")
        assert parsed.kernel == [0, 0, 0, -1, 0, 1, 0, 0, 0]
        assert parsed.get_kernel().shape == (3, 3)

    def test_errors(self):
        with pytest.raises(ValueError):
            Filter.parse("blur 5")
        with pytest.raises(ValueError):
            Filter.parse("gradient diagonal")
        with pytest.raises(ValueError):
            Filter.parse("gradient policy=mirror")
        with pytest.raises(ValueError):
            Filter.parse("gray 1")

    def test_to_string(self):
        assert Gradient().to_string() == "gradient"
        assert Gradient(kernel="horizontal", policy="wrap").to_string() == (
            "gradient kernel=horizontal policy=wrap"
        )
        assert MaxRange(strict=False).to_string() == "maxrange strict=false"
        text = Gradient(kernel=[1, 0, -1, 2, 0, -2, 1, 0, -1]).to_string()
        assert Filter.parse(text).kernel == [1, 0, -1, 2, 0, -2, 1, 0, -1]

    def test_dict_round_trip(self):
        original = Gradient(kernel="horizontal", policy=BoundaryPolicy.WHITE)
        data = original.to_dict()
        assert data == {"kernel": "horizontal", "policy": "white", "type": "Gradient"}
        assert Filter.from_dict(data) == original


class TestFilters:
    """Tests that filter objects match the functional API."""

    def test_grayscale(self, counting_image):
        assert Grayscale()(counting_image) == grayscale(counting_image)

    def test_gradient(self, step_image):
        assert Gradient("horizontal").apply(step_image) == gradient_horizontal(step_image)
        result = Gradient(policy="black").apply(step_image)
        assert result.blue_plane()[0].tolist() == [0, 95, 95, 95]
        assert result.blue_plane()[1].tolist() == [0, 127, 127, 127]

    def test_edge_detect(self, step_image):
        assert EdgeDetect().apply(step_image) == edge_detect(step_image)

    def test_max_range_context(self, make_gray):
        context = FilterContext()
        result = MaxRange().apply(make_gray([[10, 200]]), context)
        assert context["intensity_range"] == (10, 200)
        assert result.blue_plane().tolist() == [[0, 255]]

    def test_max_range_lenient(self, make_gray):
        image = make_gray([[5, 5]])
        with pytest.raises(DegenerateRangeError):
            MaxRange().apply(image)
        assert MaxRange(strict=False).apply(image) == image

    def test_add(self, make_gray):
        add = Add(inputs=["a", "b"])
        result = add.apply_multi({"a": make_gray([[100]]), "b": make_gray([[200]])})
        assert result.blue_plane().tolist() == [[255]]
        default_ports = Add().apply_multi(
            {"first": make_gray([[1]]), "second": make_gray([[2]])}
        )
        assert default_ports.blue_plane().tolist() == [[3]]
        with pytest.raises(KeyError):
            add.apply_multi({"a": make_gray([[1]])})
        with pytest.raises(ValueError):
            Add(inputs=["a"]).apply_multi({"a": make_gray([[1]])})

    def test_add_needs_named_inputs(self, make_gray):
        with pytest.raises(ValueError, match="apply_multi"):
            Add().apply(make_gray([[100, 200]]))


class TestFilterPipeline:
    """Tests chaining filters."""

    def test_parse(self):
        pipeline = FilterPipeline.parse("edges|maxrange")
        assert len(pipeline) == 2
        assert isinstance(pipeline[0], EdgeDetect)
        assert isinstance(pipeline[1], MaxRange)
        assert pipeline.to_string() == "edgedetect|maxrange"
        assert len(FilterPipeline.parse("")) == 0
        assert len(FilterPipeline.parse("gray; hgrad ;")) == 2

    def test_edges_then_stretch(self, step_image):
        context = FilterContext()
        result = FilterPipeline.parse("edges|maxrange").apply(step_image, context)
        assert result.blue_plane().tolist() == [[0, 255, 255, 0]] * 3
        assert context["intensity_range"] == (0, 127)

    def test_chainable(self, step_image):
        pipeline = FilterPipeline().append(Grayscale()).extend([EdgeDetect(), MaxRange()])
        assert [f.type for f in pipeline] == ["Grayscale", "EdgeDetect", "MaxRange"]
        assert pipeline(step_image).blue_plane()[0].tolist() == [0, 255, 255, 0]

    def test_uniform_image_fails(self, make_gray):
        with pytest.raises(DegenerateRangeError):
            FilterPipeline.parse("edges|maxrange").apply(make_gray([[9] * 3] * 3))

    def test_empty_pipeline_copies(self, step_image):
        result = FilterPipeline().apply(step_image)
        assert result == step_image
        assert result is not step_image

    def test_dict_round_trip(self):
        pipeline = FilterPipeline.parse("gray|gradient horizontal black|maxrange(false)")
        restored = FilterPipeline.from_dict(pipeline.to_dict())
        assert restored.to_string() == pipeline.to_string()
        assert restored.to_string() == (
            "grayscale|gradient kernel=horizontal policy=black|maxrange strict=false"
        )

    def test_input_untouched(self):
        rng = np.random.default_rng(3)
        image = Image(rng.integers(0, 256, size=(4, 4, 4), dtype=np.uint8))
        before = image.copy()
        FilterPipeline.parse("edges|maxrange(false)").apply(image)
        assert image == before

    def test_generic_dict_round_trip(self, step_image):
        pipeline = FilterPipeline.parse("gray|edges|maxrange")
        restored = Filter.from_dict(pipeline.to_dict())
        assert isinstance(restored, FilterPipeline)
        assert [f.type for f in restored] == ["Grayscale", "EdgeDetect", "MaxRange"]
        assert restored.apply(step_image) == pipeline.apply(step_image)

    def test_stages_from_dicts(self, make_gray):
        pipeline = FilterPipeline([{"type": "MaxRange"}]).append({"type": "Grayscale"})
        assert isinstance(pipeline[0], MaxRange)
        assert isinstance(pipeline[1], Grayscale)
        assert pipeline.apply(make_gray([[10, 200]])).blue_plane().tolist() == [[0, 255]]

    def test_combiner_is_no_stage(self):
        with pytest.raises(ValueError, match="pipeline stage"):
            FilterPipeline.parse("edges|compose")
        with pytest.raises(ValueError):
            FilterPipeline([EdgeDetect(), Add()])
        with pytest.raises(ValueError):
            FilterPipeline().append(Add(inputs=["a", "b"]))

    def test_stage_logging(self, step_image, caplog):
        caplog.set_level(logging.DEBUG, logger="rasterstag.filters.pipeline")
        FilterPipeline.parse("gray|edges").apply(step_image)
        records = [r for r in caplog.records if r.name == "rasterstag.filters.pipeline"]
        assert len(records) == 2
        assert records[0].msg == "Stage %d/%d: %s on %s"
        assert records[0].getMessage().startswith("Stage 1/2: Grayscale()")
