# vivatech

A small scraper for the VivaTech conference website. It does not read speaker
and partner listings from the rendered HTML. It takes them from the JSON array
that the page embeds, with its quotes backslash-escaped, and writes the results
to CSV.

## Installation

```
pip install .
```

## Command-line use

```
vivatech-scraper [speakers|partners] [-o OUTPUT] [-v] [-V]
```

- `speakers` (the default) fetches the conference speakers page and writes
  `vivatech_speakers_2025_extended.csv`.
- `partners` fetches the conference partners page and writes
  `vivatech_partners_2025.csv`.
- `-o/--output PATH` sets a different output file.
- `-v/--verbose` turns on logging to stderr. Repeat it for more detail: `-v`
  gives info and `-vv` gives debug.
- `-V/--version` prints the version.
- `--url URL` fetches a different page. It is hidden from the help text and is
  meant mainly for testing.

Examples:

```
vivatech-scraper
vivatech-scraper partners -o partners.csv -vv
```

The command exits with status 0 on success. It exits with status 1 and prints
`Error: ...` to stderr in these cases:

- the request fails or the server answers with a non-2xx status;
- no embedded data is found;
- the speaker JSON has an unexpected shape;
- the output file cannot be written.

If the embedded speaker data cannot be found, the fetched page is saved to
`debug_vivatech_page.html` in the current directory so you can inspect it.

### Speaker CSV columns

`ID, FirstName, LastName, Email, JobTitle, Company, Tags, Themes, HasBio,
HasSessions, IsOfficial, IsPartner, IsTopSpeaker, CommunicationManager,
ImageSmallURL, ImageThumbnailURL, ImageLargeURL, ImageMainURL`

- Tags and themes are joined with `", "`.
- Flags are written as `true` or `false`.
- A missing communication manager is written as `N/A`. So are the image URL
  columns when a speaker has no image.

### Partner CSV columns

`CompanyName, Category, Country, Description, Website, LogoURL`

- Only entries whose `type` contains `partner` or is exactly `startup` are kept.
- Only the first entry with a given name is written.
- If an entry has a `key_figures.city`, its country comes from a short list of
  well-known cities, or is left empty when the city is not on it.
- Otherwise the country is guessed from the company name. A trailing
  `" - <Country>"` is used first; failing that, the name is searched for a
  country name.

When there are no records, both CSV writers leave an empty file, without even a
header row.

## Library use

```python
from vivatech.speakers import extract_speakers_json, parse_speakers, write_speakers_csv
from vivatech.partners import extract_partners_from_html, write_partners_csv

speakers = parse_speakers(extract_speakers_json(html))
write_speakers_csv(speakers, "speakers.csv")      # returns the number of rows

partners = extract_partners_from_html(html)
write_partners_csv(partners, "partners.csv")      # returns the number of rows
```

- `vivatech.speakers`
  - `Speaker` and `Image` are frozen dataclasses.
  - `Speaker.from_dict` builds a speaker from one decoded JSON object.
  - `Speaker.to_record` returns its CSV row.
  - Malformed speaker data raises `SpeakerParseError`, a `ValueError`.
- `vivatech.partners`
  - `Partner` is a frozen dataclass with a `to_record` method.
  - `partners_from_json_array` applies the filtering described above to
    decoded JSON objects.
  - `country_from_city`, `country_from_name` and `is_likely_country` are the
    country helpers.
  - A page without usable partner data raises `NoPartnerDataError`.
- `vivatech.extract`
  - `find_embedded_array` locates the escaped JSON array in a page.
  - `extract_embedded_json` returns that array decoded to plain JSON text.
  - `unescape_unicode` decodes `\uXXXX`, `\n`, `\r`, `\t`, `\"` and `\\`
    escapes.
  - When nothing is found, `ExtractionError` is raised. It is a `ValueError`,
    and `NoPartnerDataError` derives from it.
- `vivatech.cli`
  - `fetch_page_content` downloads a page and raises `requests.HTTPError` on a
    non-2xx status.
  - `save_debug_html` writes a page to disk.
  - `run_speakers` and `run_partners` each run a whole scrape and return the
    record count.
  - `main` is the command-line entry point.

## Limitations

Pages are fetched with a single plain HTTP request and no JavaScript is run.
Only data the server embeds in the initial HTML is found. Nothing is cached or
stored apart from the CSV output and the debug page.

## Running the tests

```
pip install ".[test]"
pytest
```