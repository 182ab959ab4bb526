# racerep

`racerep` keeps track of how the other drivers in your sim-racing
sessions behave. You can tag a driver as a clean driver, a good racer,
aggressive, a dirty driver, a rammer, a blocker, an unsafe rejoiner or a
rookie, and you can add personal notes. Tags and notes are saved to a
local SQLite database, so they are still there the next time you meet
that driver on track.

## Installation

```
pip install .
```

The only runtime dependency is Pillow, which is used to load and draw
tag icons. To run the tests, install the `test` extra and run `pytest`.

## Modules

- `racerep.types` is the data model. `DriverData` is one car in a
  session. `DriverReputation` is what you have recorded about a driver,
  with `has_behavior`, `add_behavior`, `remove_behavior`,
  `has_warning_flags` and `is_positive`. `DriverFlags` lists the
  behaviour tags, `DriverTrustLevel` the trust levels, and `AppView` the
  two views (flagged drivers, current session). `ProximityWarning` gives
  `warning_text()` and `warning_color()` for a nearby car.
  `driver_flags_to_string` names a flag. `default_tags()` returns the
  eight standard `TagInfo` entries in display order, and `IconPaths`
  holds their icon file paths.
- `racerep.colors` holds the palette (`Theme`, `DriverTagColors`,
  `IRatingColors`, `SafetyRatingColors`, `SpecialColors`). Each colour is
  an RGBA `Color`, and `Color.to_u32()` packs it into 32 bits.
  `get_irating_color` and `get_safety_rating_color` pick a colour band
  for a rating. `dark_gaming_theme()` returns the theme's colours,
  rounding and spacing as a dictionary.
- `racerep.strings` cleans up driver names. `trim_copy` strips
  whitespace from both ends. `basic_normalize` keeps ASCII letters,
  digits and a few separators. `cp1252_to_utf8` decodes Windows-1252
  bytes.
- `racerep.session_info` provides `SessionState` and
  `session_state_name`. `current_session_info` builds a summary line
  from a session string and a state value. `strength_of_field` is the
  average iRating of the drivers who have one. `determine_session_type`
  classifies a session string.
- `racerep.logger` writes timestamped lines to standard output and to a
  log file. It has `configure`, `shutdown`, `set_level`, `debug`,
  `info`, `warning`, `error` and `critical`, with levels from
  `LogLevel`. If `configure` has not been called, the first message
  opens `iRacingReputation.log` in the current directory.
- `racerep.persistence` stores reputations. `Database` is a SQLite
  connection and a context manager, with `open`, `close`, `execute`,
  `query`, `last_insert_id` and `changes`. `ReputationRepository`
  offers `init`, `load_all` and `upsert` on the `driver_reputation`
  table. Failures raise `PersistenceError`.
- `racerep.icons` loads icons. `IconManager.load_icon` loads an image as
  RGBA, raising `FileNotFoundError` or `OSError` on failure.
  `get_icon`, `load_all_icons` and `shutdown` complete the manager.
  `create_fallback_icon()` draws a grey 32×32 placeholder with a light
  border.
- `racerep.panels` holds the view models. `DriverSelection` is the shared
  driver list, the selected index and the notes buffer.
  `DriverListComponent` lists and selects drivers and skips placeholder
  slots. `DriverInfoComponent.fields()` returns the labelled details of
  the selected driver. `DriverNotesComponent` handles editing, saving
  and clearing notes. `SideMenu` switches between the views.
- `racerep.tagging` has `DriverTagsComponent.toggle_tag` and
  `active_tags`, and `DriverTagManager`, which builds the panels over one
  selection. It also provides the layout helpers `columns_for_width` and
  `shrink_to_fit`, and `trust_level_from_flags`.
- `racerep.store` has `DriverTagModel`, which ties everything together:
  the session's drivers, the reputations, debounced saving, and the
  drivers listed in each view. It also provides `update_trust_level`,
  `is_placeholder_driver` and `truncate_text`.

## Example

```python
from racerep.store import DriverTagModel
from racerep.types import DriverFlags

with DriverTagModel() as model:
    # Opens the database, tries to load tag icons from Assets/Icons
    # (falling back to the placeholder icon) and loads sample drivers.
    model.initialize("reputation.db")

    rep = model.get_or_create_reputation(789012, "Anna Thompson")
    rep.add_behavior(DriverFlags.CLEAN_DRIVER)
    model.mark_dirty(789012)

    # Saving is debounced by three seconds; force writes straight away.
    saved = model.flush_dirty(force=True)

    print(saved, model.count_drivers_with_flags())
# Leaving the block calls shutdown(), which saves anything still pending.
```

If you call `initialize()` without a path, the database file
`reputation.db` is placed in the directory of the running script.

To feed live data in, pass lists of `DriverData` to
`load_session_data` or `update_session_data`. Both create a neutral
reputation for every driver that has none yet. `drivers_for_view`
returns the drivers of the current session or, for
`AppView.DRIVERS_WITH_FLAGS`, one entry per flagged reputation, ordered
by customer id.

## Trust levels

`DriverTagsComponent.toggle_tag` and `ReputationRepository.load_all`
derive the trust level from the tags, and negative tags take priority:

- A rammer or a dirty driver is someone to **avoid**.
- An aggressive driver, a blocker or an unsafe rejoiner calls for
  **caution**.
- A clean driver or a good racer is **trusted**.
- Anyone else is **neutral**.

`toggle_tag` recomputes the level only when it adds a tag. Removing a tag
leaves the level unchanged. `load_all` keeps the stored level for
drivers who have no tags.

`racerep.store.update_trust_level` works differently: it uses a weighted
score. The weights are clean +3, good racer +4, aggressive +1, dirty −3,
rammer −5, blocker −2 and unsafe rejoin −2. A score of 4 or more is
trusted, 1 to 3 is neutral, −3 or less is avoid, −1 and −2 are caution,
and 0 is neutral.

## What this package does not do

`racerep` has no window and no command-line program. The panel classes
hold the state and rules of a tagging interface, but nothing draws them
on screen. The package does not connect to a running simulator or read
telemetry either: session state, session strings and driver lists must
be supplied by the caller.