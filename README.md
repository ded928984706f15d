# ghclone

`ghclone` clones many repositories of a GitHub account in one go. You can
clone every repository the account lists, only the most recently created one,
or pick some from a numbered list.

Cloning is done by ghclone itself over the git smart HTTP protocol or over
SSH; no `git` program is needed.

## Installation

```
pip install .
```

## Usage

```
ghclone [USERNAME] [options]
```

If no username is given, the default username from the configuration file is
used. Giving more than one username is an error.

Options:

- `-a`, `--all`: clone all of the user's repositories (this is what happens anyway)
- `-d`, `--dir DIR`: directory to clone into (defaults to the current working directory);
  each repository goes into `DIR/<repository name>`
- `-l`, `--latest`: clone only the most recently created repository
- `-c`, `--choose`: choose repositories from a numbered list
- `-s`, `--ssh`: clone over SSH instead of HTTPS

`--latest` and `--choose` cannot be used together.

With `--choose`, enter one or more indexes separated by single spaces. Ranges
are allowed in either order, for example `0`, `1 2 3`, `1-10` or `10-1`.
Repeated indexes are cloned once. An index that is not a number or lies
outside the list ends the program with an error. Private repositories are
shown in red.

Before cloning, ghclone shows how many repositories it found and asks for
confirmation. Pressing Enter means yes; `y` or `yes` (any case) also mean yes,
anything else means no.

Errors are printed in red and the command exits with status 1.

### Examples

```
ghclone some-user
ghclone some-user --latest --dir ~/src
ghclone --choose --ssh
```

## Configuration

Settings are read from `$HOME/.config/ghclone.toml`:

```toml
GithubAccessToken = "token"
DefaultUsername = "some-user"
```

Key names are matched without regard to case. If the file is missing,
unreadable, not valid TOML, or holds non-string values, empty defaults are
used.

When an access token is set, it is sent with every API request. Running
ghclone for the default username (or with no username) then lists the
authenticated account's own repositories, private ones included.

`ghclone.config.Config.write()` saves a configuration back to that file,
creating the directory if needed.

## SSH

For `--ssh`, ghclone looks under `~/.ssh` for a private key whose file name
starts with `id_` and contains no dot (so `id_ed25519` but not
`id_ed25519.pub`). There must be exactly one such file. The server's host key
must already be in your known hosts file; unknown hosts are rejected. The SSH
agent and other keys are not used.

## Using it from Python

- `ghclone.github.get_user_repos(username, config)` returns the repository
  records from the GitHub API.
- `ghclone.clone.plain_clone(url, directory)` clones one repository and checks
  out its default branch.
- `ghclone.clone.clone_repositories(repos, directory, ssh)` clones a list of
  repository records.
- `ghclone.config.parse_config()` and `ghclone.config.Config` read and write
  the configuration.

## What it does not do

- Only the first 100 repositories of an account are listed; further pages of
  the API result are not fetched.
- HTTPS cloning sends no credentials, so private repositories must be cloned
  with `--ssh`.
- Only the default branch is checked out; other branches are kept as
  `refs/remotes/origin/*` references. Submodules are left as empty
  directories, and Git LFS content is not fetched.
- A directory that already holds a `.git` directory is not cloned into.