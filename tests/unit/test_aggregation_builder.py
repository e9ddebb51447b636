"""
Unit tests for the aggregation DSL builders.
"""

import pytest

from agg_types.requests import RangeSpec
from utils.aggregation_builder import (
    aggregation_type,
    avg_aggregation,
    date_range_aggregation,
    extended_stats_aggregation,
    filter_aggregation,
    filters_aggregation,
    global_aggregation,
    histogram_aggregation,
    missing_aggregation,
    nested_aggregation,
    order_by_aggregation,
    order_by_count,
    order_by_key,
    percentile_ranks_aggregation,
    percentiles_aggregation,
    reverse_nested_aggregation,
    significant_terms_aggregation,
    terms_aggregation,
    top_hits_aggregation,
    value_count_aggregation,
    with_sub_aggregations,
)


class TestBucketBuilders:

    def test_global(self):
        assert global_aggregation() == {"global": {}}

    def test_filter(self):
        query = {"term": {"parentId": 5}}
        assert filter_aggregation(query) == {"filter": query}

    def test_filters_are_keyed(self):
        aggregation = filters_aggregation({
            "men": {"term": {"parentId": 5}},
            "women": {"term": {"parentId": 1}},
        })

        assert aggregation == {
            "filters": {
                "filters": {
                    "men": {"term": {"parentId": 5}},
                    "women": {"term": {"parentId": 1}},
                }
            }
        }

    def test_filters_other_bucket(self):
        aggregation = filters_aggregation({"men": {"term": {"parentId": 5}}}, other_bucket_key="rest")
        assert aggregation["filters"]["other_bucket_key"] == "rest"

    def test_filters_require_one_filter(self):
        with pytest.raises(ValueError):
            filters_aggregation({})

    def test_missing_and_nested(self):
        assert missing_aggregation("parentId") == {"missing": {"field": "parentId"}}
        assert nested_aggregation("resellers") == {"nested": {"path": "resellers"}}

    def test_reverse_nested_defaults_to_root(self):
        assert reverse_nested_aggregation() == {"reverse_nested": {}}
        assert reverse_nested_aggregation("outer") == {"reverse_nested": {"path": "outer"}}

    def test_terms_options(self):
        aggregation = terms_aggregation("parentId", size=20, order=order_by_key(), min_doc_count=2)

        assert aggregation == {
            "terms": {
                "field": "parentId",
                "size": 20,
                "order": {"_key": "asc"},
                "min_doc_count": 2,
            }
        }

    def test_terms_minimal(self):
        assert terms_aggregation("parentId") == {"terms": {"field": "parentId"}}

    def test_empty_field_rejected(self):
        with pytest.raises(ValueError, match="Field name cannot be empty"):
            terms_aggregation("")

    def test_significant_terms(self):
        assert significant_terms_aggregation("parentId") == {"significant_terms": {"field": "parentId"}}

    def test_date_range(self):
        aggregation = date_range_aggregation(
            "createTime",
            [
                RangeSpec.unbounded_to("20160522161616"),
                RangeSpec(from_="20160522161616", to="20210522161616"),
                RangeSpec.unbounded_from("20210522161616"),
            ],
            format="yyyyMMddHHmmss",
        )

        assert aggregation == {
            "date_range": {
                "field": "createTime",
                "format": "yyyyMMddHHmmss",
                "ranges": [
                    {"to": "20160522161616"},
                    {"from": "20160522161616", "to": "20210522161616"},
                    {"from": "20210522161616"},
                ],
            }
        }

    def test_date_range_keyed_with_keys(self):
        aggregation = date_range_aggregation(
            "createTime",
            [RangeSpec(from_="now-10M/M", to="now", key="recent")],
            keyed=True,
        )

        assert aggregation["date_range"]["keyed"] is True
        assert aggregation["date_range"]["ranges"] == [{"key": "recent", "from": "now-10M/M", "to": "now"}]

    def test_date_range_rejects_unbounded_range(self):
        with pytest.raises(ValueError, match="'from' or a 'to'"):
            date_range_aggregation("createTime", [RangeSpec()])

    def test_date_range_requires_ranges(self):
        with pytest.raises(ValueError):
            date_range_aggregation("createTime", [])

    def test_histogram(self):
        assert histogram_aggregation("parentId", 1) == {"histogram": {"field": "parentId", "interval": 1}}

    @pytest.mark.parametrize("interval", [0, -1])
    def test_histogram_rejects_non_positive_interval(self, interval):
        with pytest.raises(ValueError, match="interval"):
            histogram_aggregation("parentId", interval)


class TestOrders:

    def test_count_defaults_to_descending(self):
        assert order_by_count() == {"_count": "desc"}
        assert order_by_count(ascending=True) == {"_count": "asc"}

    def test_key_defaults_to_ascending(self):
        assert order_by_key() == {"_key": "asc"}
        assert order_by_key(ascending=False) == {"_key": "desc"}

    def test_by_sub_aggregation(self):
        assert order_by_aggregation("avg_parentId", ascending=False) == {"avg_parentId": "desc"}
        assert order_by_aggregation("stats.avg") == {"stats.avg": "asc"}


class TestMetricBuilders:

    def test_single_field_metrics(self):
        assert avg_aggregation("classLvl") == {"avg": {"field": "classLvl"}}
        assert value_count_aggregation("classLvl") == {"value_count": {"field": "classLvl"}}

    def test_extended_stats_sigma(self):
        assert extended_stats_aggregation("classLvl", sigma=3) == {
            "extended_stats": {"field": "classLvl", "sigma": 3}
        }

    def test_percentiles_default_percents(self):
        assert percentiles_aggregation("id") == {"percentiles": {"field": "id"}}

    def test_percentiles_custom_percents(self):
        aggregation = percentiles_aggregation("id", [1, 6, 10, 20, 30, 75, 95, 99])
        assert aggregation["percentiles"]["percents"] == [1.0, 6.0, 10.0, 20.0, 30.0, 75.0, 95.0, 99.0]

    def test_percentiles_out_of_range(self):
        with pytest.raises(ValueError, match="between 0 and 100"):
            percentiles_aggregation("id", [50, 101])

    def test_percentile_ranks(self):
        assert percentile_ranks_aggregation("classLvl", [1, 2]) == {
            "percentile_ranks": {"field": "classLvl", "values": [1.0, 2.0]}
        }

    def test_percentile_ranks_require_values(self):
        with pytest.raises(ValueError):
            percentile_ranks_aggregation("classLvl", [])

    def test_top_hits(self):
        assert top_hits_aggregation(size=1, from_=10) == {"top_hits": {"size": 1, "from": 10}}

    def test_top_hits_rejects_negative_offset(self):
        with pytest.raises(ValueError):
            top_hits_aggregation(from_=-1)


class TestSubAggregations:

    def test_attach_sub_aggregation(self):
        parent = terms_aggregation("parentId")
        aggregation = with_sub_aggregations(parent, {"top": top_hits_aggregation(size=1)})

        assert aggregation == {
            "terms": {"field": "parentId"},
            "aggs": {"top": {"top_hits": {"size": 1}}},
        }
        # parent untouched
        assert "aggs" not in parent

    def test_sub_aggregations_merge(self):
        aggregation = with_sub_aggregations(terms_aggregation("parentId"), {"a": avg_aggregation("x")})
        aggregation = with_sub_aggregations(aggregation, {"b": avg_aggregation("y")})

        assert set(aggregation["aggs"]) == {"a", "b"}

    def test_three_level_nesting(self):
        aggregation = with_sub_aggregations(
            nested_aggregation("resellers"),
            {
                "type": with_sub_aggregations(
                    terms_aggregation("resellers.type"),
                    {"reseller_to_product": reverse_nested_aggregation()},
                )
            },
        )

        assert aggregation["aggs"]["type"]["aggs"]["reseller_to_product"] == {"reverse_nested": {}}

    def test_metric_cannot_hold_sub_aggregations(self):
        with pytest.raises(ValueError, match="cannot hold sub-aggregations"):
            with_sub_aggregations(avg_aggregation("classLvl"), {"x": avg_aggregation("y")})

    def test_global_only_top_level(self):
        with pytest.raises(ValueError, match="top-level"):
            with_sub_aggregations(terms_aggregation("parentId"), {"all": global_aggregation()})

    def test_invalid_sub_aggregation_name(self):
        with pytest.raises(ValueError, match="Invalid aggregation name"):
            with_sub_aggregations(terms_aggregation("parentId"), {"a[0]": avg_aggregation("x")})

    def test_aggregation_type(self):
        assert aggregation_type(with_sub_aggregations(global_aggregation(), {"t": terms_aggregation("x")})) == "global"

        with pytest.raises(ValueError):
            aggregation_type({"terms": {}, "avg": {}})
