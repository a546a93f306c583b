import csv
import io

from conftest import make_post
from models.domain import Platform
from utils.csv_export import (
    CSV_HEADERS,
    export_brand_csv,
    format_post_date,
    group_posts_by_date,
    posts_to_csv,
)


class TestPostsToCsv:

    def test_header_row(self):
        assert posts_to_csv([]) == "Date,Platform,Topic,Text,TOV Phrase,Hashtags\n"

    def test_row_fields(self):
        post = make_post("p1", text="Hello", platform=Platform.X, hashtags=["#a", "#b"])

        lines = posts_to_csv([post]).splitlines()

        assert lines[1] == '2026-10-01 09:00,X (formerly Twitter),Autumn menu,Hello,Quality in every cup,#a #b'

    def test_quotes_and_commas_are_escaped(self):
        post = make_post("p1", text='He said, "hi"')

        row = posts_to_csv([post]).splitlines()[1]

        assert '"He said, ""hi"""' in row

    def test_multiline_text_survives_a_csv_reader(self):
        post = make_post("p1", text="Line one\nLine two, with comma")

        rows = list(csv.reader(io.StringIO(posts_to_csv([post]))))

        assert rows[0] == CSV_HEADERS
        assert rows[1][3] == "Line one\nLine two, with comma"

    def test_rows_follow_history_order(self):
        posts = [make_post("new", text="Newest"), make_post("old", text="Oldest")]

        rows = list(csv.reader(io.StringIO(posts_to_csv(posts))))

        assert [r[3] for r in rows[1:]] == ["Newest", "Oldest"]


class TestFormatPostDate:

    def test_iso_timestamp(self):
        assert format_post_date("2026-03-05T14:07:59.123+00:00") == "2026-03-05 14:07"

    def test_unparsable_value_is_kept(self):
        assert format_post_date("yesterday") == "yesterday"


class TestExportBrandCsv:

    def test_file_is_written(self, tmp_path, brand):
        exported = brand.model_copy(update={"posts": [make_post("p1")]})

        path = export_brand_csv(exported, tmp_path / "exports" / "out.csv")

        assert path.exists()
        content = path.read_text(encoding="utf-8")
        assert content.startswith("Date,Platform,Topic,Text,TOV Phrase,Hashtags\n")
        assert "Quality in every cup" in content


class TestGroupPostsByDate:

    def test_newest_day_first_and_newest_post_first(self):
        posts = [
            make_post("a", date_generated="2026-10-01T08:00:00+00:00"),
            make_post("b", date_generated="2026-10-02T09:00:00+00:00"),
            make_post("c", date_generated="2026-10-01T18:00:00+00:00"),
        ]

        grouped = group_posts_by_date(posts)

        assert list(grouped) == ["2026-10-02", "2026-10-01"]
        assert [p.id for p in grouped["2026-10-01"]] == ["c", "a"]
        assert [p.id for p in grouped["2026-10-02"]] == ["b"]

    def test_empty_history(self):
        assert group_posts_by_date([]) == {}
