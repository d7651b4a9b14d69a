# termscreen

termscreen models the character image of a VT100-style terminal: a grid of
cells with colours and rendition flags, a cursor, scrolling margins, tab
stops, a scrollback history, text selection, and windows that look onto a
part of the screen and its history.

## Installation

```
pip install termscreen
```

The only dependency is `wcwidth`, used to find how many columns a
character takes.

## Cells

`termscreen.cells` holds the building blocks:

- `Character` – one cell: a code point, a foreground and a background
  `CharacterColor`, and `Rendition` flags. `Character.reversed()` swaps the
  colours; `default_character()` is the blank cell.
- `CharacterColor` – a colour in a `ColorSpace` (`DEFAULT`, `SYSTEM`,
  `INDEX256`, `RGB`), with `is_valid()` and `toggled_intensive()`.
- `Rendition`, `LineProperty` (`WRAPPED`, `DOUBLEWIDTH`, `DOUBLEHEIGHT`)
  and `ScreenMode` (`ORIGIN`, `WRAP`, `INSERT`, `SCREEN`, `CURSOR`,
  `NEWLINE`).
- `HistoryBuffer` – lines scrolled off the screen. `max_lines=None` keeps
  every line, `0` keeps none, a positive number keeps the most recent ones.

## A screen

```python
from termscreen.screen import Screen

screen = Screen(24, 80)
screen.set_scroll(1000, False)     # keep up to 1000 lines of history

for ch in "hello":
    screen.show_character(ch)
screen.carriage_return()
screen.new_line()

print(screen.cursor())             # (0, 1): column and line
image = screen.get_image(0, screen.lines() - 1)   # list of Character, row after row
```

A new screen keeps no history until `set_scroll` is called.

The screen offers the usual terminal operations:

- cursor movement: `cursor_up`, `cursor_down`, `cursor_left`,
  `cursor_right`, `set_cursor_x`, `set_cursor_y`, `set_cursor_yx` (1-based),
  `home`, `carriage_return`, `backspace`, `tabulate`, `back_tabulate`,
  `clear_tab_stops`, `change_tab_stop`;
- margins and scrolling: `set_margins`, `set_default_margins`, `index`,
  `reverse_index`, `next_line`, `new_line`, `scroll_up`, `scroll_down`,
  `insert_lines`, `delete_lines`;
- editing and erasing: `erase_chars`, `delete_chars`, `insert_chars`,
  `clear_to_end_of_line`, `clear_to_begin_of_line`, `clear_entire_line`,
  `clear_to_end_of_screen`, `clear_to_begin_of_screen`,
  `clear_entire_screen`, `clear`, `help_align`;
- modes: `set_mode`, `reset_mode`, `save_mode`, `restore_mode`, `get_mode`
  with values from `ScreenMode`; `save_cursor` and `restore_cursor`;
- rendition and colour: `set_rendition`, `reset_rendition`,
  `set_default_rendition`, `set_fore_color`, `set_back_color` (an invalid
  colour selects the default); `set_line_property`;
- `resize_image` and `reset`.

For counts of 0, movement and editing operations act as if given 1.

Lines that scroll off the top of the whole-screen region go into the
history. `history_lines()` says how many are kept, `dropped_lines()` counts
lines lost because the history was full, and `scrolled_lines()` and
`last_scrolled_region()` describe the most recent scrolling for redraw
optimisation; `reset_scrolled_lines()` and `reset_dropped_lines()` zero the
counters. `get_line_properties(start, end)` returns the `LineProperty` of
each line in a range.

## Selection

```python
screen.set_selection_start(0, 0, False)
screen.set_selection_end(4, 0)
print(screen.selected_text(True))  # "hello"
```

Line numbers in a selection count from the oldest history line, followed
by the screen lines. A selection can be made in column mode, and
`is_selected`, `selection_start`, `selection_end` and `clear_selection`
inspect or drop it. Selected cells appear with reversed colours in
`get_image`.

`text_range(start_line, end_line)` returns the text of a range of lines and
clears the selection afterwards; `history_line(number)` selects a single
line and returns its text without a line break. Trailing whitespace is
dropped from each line, and wrapped lines are joined without a newline.

## A window onto the screen

```python
from termscreen.screenwindow import ScreenWindow, ScrollMode

window = ScreenWindow(screen)
window.set_window_lines(24)
window.scroll_by(ScrollMode.PAGES, -1)   # up by half a window
cells = window.get_image()
window.notify_output_changed()           # after the screen has changed
```

A window shows `window_lines()` lines starting at `current_line()`, filling
lines past the end of the screen with blank cells. While `track_output` is
true, `notify_output_changed()` moves it to the bottom of the screen; it
also keeps a `scroll_count()` and a `scroll_region()`. Callables appended to
`output_changed`, `scrolled` (given the new top line) and
`selection_changed` are called when those things happen. Selection methods
on the window take window lines and translate them to screen lines.

## Shell commands

```python
from termscreen.shellcommand import ShellCommand, expand, expand_all

cmd = ShellCommand("/bin/sh -c 'echo hi'")
cmd.command()      # "/bin/sh"
cmd.arguments()    # ["/bin/sh", "-c", "echo hi"]
cmd.full_command() # "/bin/sh -c echo hi"
expand("$HOME/bin", {"HOME": "/home/user"})   # "/home/user/bin"
```

`expand` replaces `$NAME` references that end at a space, a slash or the
end of the text; escaped `$` and unset or empty variables are left as they
are. Without an `environ` mapping it reads `os.environ`. `expand_all` does
the same for a list of strings.

## What it does not do

termscreen is only the screen model. It does not parse escape sequences or
decode a byte stream, does not start programs or talk to a pseudo-terminal,
and draws nothing: an emulator drives a `Screen` by calling its operations,
and a display reads cells back through a `ScreenWindow`. There is no
command-line program.