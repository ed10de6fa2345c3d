"""
Concatenate two country files, tag each row with a language and
print a per-language count as a Rich table.

Run from the repository root:
    python examples/countries_report.py
"""

import io

from tablestream import Pipeline, Target, Transformer

NORDIC = "ID,Country\n1,Norway\n2,Sweden\n3,Iceland\n"
PACIFIC = "ID,Country\n4,Tuvalu\n5,Fiji\n"

LANGUAGES = {
    "Norway": "Norwegian",
    "Sweden": "Swedish",
    "Iceland": "Icelandic",
}


def language(headers, row):
    return LANGUAGES.get(headers.field_of(row, "Country"), "English")


def main():
    pipeline = (
        Pipeline.from_pipelines(
            [
                Pipeline.from_reader(io.StringIO(NORDIC)),
                Pipeline.from_reader(io.StringIO(PACIFIC)),
            ]
        )
        .add_col("Language", language)
        .transform_into(
            lambda: [
                Transformer("Language").keep_unique(),
                Transformer("Countries").count(),
            ]
        )
    )

    target = Target.table(title="Countries per language")
    pipeline.flush(target).run()
    print(target.getvalue())


if __name__ == "__main__":
    main()
