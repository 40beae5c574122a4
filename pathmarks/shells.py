"""Shell integration scripts printed by `pathmarks init`.

The binary never changes directory itself. Each script defines a wrapper
function that captures the printed path and runs `cd` in the user's shell:

- ``{command} [query]``  jump to a subdirectory or bookmark (pick if no query)
- ``{command}i``         pick repeatedly, descending one level each time
- ``{command}s <label>`` bookmark the current directory
- ``{command}d [label]`` delete a bookmark (picker without a label)
"""

SHELLS = ("bash", "zsh", "fish", "nushell")

BASH_TEMPLATE = """\
{command}() {{
  local dest
  dest="$(command pathmarks guess "$@")" || return $?
  [[ -n "$dest" ]] && builtin cd -- "$dest"
}}

{command}i() {{
  local dest
  while true; do
    dest="$(command pathmarks pick)" || break
    [[ -n "$dest" && -d "$dest" ]] || break
    builtin cd -- "$dest" || break
  done
}}

alias {command}s='command pathmarks save'
alias {command}d='command pathmarks delete'

_{command}_complete() {{
  local cur
  cur="${{COMP_WORDS[COMP_CWORD]}}"
  COMPREPLY=($(compgen -W "$(command pathmarks list 2>/dev/null)" -- "$cur"))
}}
complete -o dirnames -F _{command}_complete {command}
complete -F _{command}_complete {command}d
"""

ZSH_TEMPLATE = """\
{command}() {{
  local dest
  dest="$(command pathmarks guess "$@")" || return $?
  [[ -n "$dest" ]] && builtin cd -- "$dest"
}}

{command}i() {{
  local dest
  while true; do
    dest="$(command pathmarks pick)" || break
    [[ -n "$dest" && -d "$dest" ]] || break
    builtin cd -- "$dest" || break
  done
}}

alias {command}s='command pathmarks save'
alias {command}d='command pathmarks delete'

_{command}() {{
  local -a candidates
  candidates=(${{(f)"$(command pathmarks list 2>/dev/null)"}})
  compadd -a candidates
  _path_files -/
}}
if (( $+functions[compdef] )); then
  compdef _{command} {command}
fi
"""

FISH_TEMPLATE = """\
function {command}
    set -l dest (command pathmarks guess $argv)
    or return $status
    test -n "$dest"; and cd $dest
end

function {command}i
    while true
        set -l dest (command pathmarks pick)
        or break
        test -n "$dest"; and test -d "$dest"; or break
        cd $dest; or break
    end
end

alias {command}s "command pathmarks save"
alias {command}d "command pathmarks delete"
complete --no-files --keep-order -c {command} -a "(command pathmarks list)"
complete --no-files -c {command}d -a "(command pathmarks list)"
"""

NUSHELL_TEMPLATE = """\
def "nu-complete pathmarks" [] {{
  ^pathmarks list | lines
}}

def --env {command} [query?: string@"nu-complete pathmarks"] {{
  let dest = if $query == null {{ ^pathmarks guess }} else {{ ^pathmarks guess $query }}
  if ($dest | is-not-empty) {{
    cd $dest
  }}
}}

def --env {command}i [] {{
  loop {{
    let result = (do {{ ^pathmarks pick }} | complete)
    if $result.exit_code != 0 {{ break }}
    let dest = ($result.stdout | str trim)
    if ($dest | is-empty) or (($dest | path type) != "dir") {{ break }}
    cd $dest
  }}
}}

alias {command}s = ^pathmarks save
alias {command}d = ^pathmarks delete
"""

_TEMPLATES = {
    "bash": BASH_TEMPLATE,
    "zsh": ZSH_TEMPLATE,
    "fish": FISH_TEMPLATE,
    "nushell": NUSHELL_TEMPLATE,
}


def render_init(shell: str, command: str = "t") -> str:
    """Return the integration script for *shell* with wrappers named *command*."""
    try:
        template = _TEMPLATES[shell]
    except KeyError:
        raise ValueError(f"Unsupported shell: {shell} (choose from {', '.join(SHELLS)})") from None
    return template.format(command=command)
