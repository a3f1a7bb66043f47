# singruleset

Builds sing-box rule sets from AdGuard blocklists and IP lists.

The `singruleset` command reads a `config.json`, downloads every list it
names, and hands each one to the `sing-box` binary:

- AdGuard blocklists are converted with
  `sing-box rule-set convert --type adguard` into `.srs` files.
- IP lists are filtered down to the lines that are valid IP addresses or CIDR
  ranges, written out as a source rule set (`.json`, version 1, one `ip_cidr`
  rule), and compiled with `sing-box rule-set compile` into `.srs` files.

## Requirements

- Python 3.10 or later
- `sing-box` installed and on `PATH`

No third-party Python packages are needed.

## Installation

```
pip install .
```

## Configuration

Put a `config.json` in the working directory:

```json
{
  "Adguard_Blocklists": [
    {"name": "ads", "url": "https://lists.example.com/adguard-ads.txt"}
  ],
  "IP_Lists": [
    {"name": "bad-hosts", "url": "https://lists.example.com/bad-ips.txt"}
  ]
}
```

Either section may be left out, in which case it is treated as empty. Each
`name` becomes a file name. When the same name appears twice within one
section, the last entry wins.

## Usage

```
singruleset
```

By default the working directory is the current directory. Use `--workdir`
to point at another one; it must already exist:

```
singruleset --workdir /path/to/project
```

Results are written under `output/` in the working directory:

```
output/
  Adguard_Blocklists/
    ads.txt        downloaded list
    ads.srs        compiled rule set
  IP_Lists/
    bad-hosts.txt  downloaded list
    bad-hosts.json source rule set
    bad-hosts.srs  compiled rule set
```

All downloads run concurrently; once they have all finished, the AdGuard lists
are converted concurrently, then the IP lists. A download or conversion that
fails is logged and does not stop the others, and the command still exits
with status 0. The `.txt` file is created before its download starts, so a
failed download can leave an empty file behind.

The command exits with status 1 if the working directory does not exist, if
`config.json` is missing or is not a valid configuration, if the output
directories cannot be created, or if `sing-box version` cannot be run.

An IP list with no valid addresses or ranges in it is reported as a
conversion error and gets no rule set.

## Using it from Python

- `singruleset.config.read_config(path)` loads a configuration into a
  `Config` holding `BlocklistEntry` items; `Config.mappings()` returns the
  name-to-URL maps for the AdGuard lists and the IP lists. `Workspace` resolves
  the working directory and the `config.json` inside it.
- `singruleset.download.download_file(url, path)` saves a URL to a file and
  raises `DownloadError` on any status other than 200 or a failed request.
- `singruleset.convert.valid_ip_entries(lines)` keeps the stripped lines that
  are IP addresses or CIDR ranges; `rule_set_from_ip_list(entries)` builds the
  source rule set as a dict.
- `singruleset.convert.convert_from_adguard(source, target)` and
  `convert_from_ip_list(source, target)` run `sing-box`; the latter returns the
  path of the compiled `.srs` file. Both raise `ConversionError` on failure.