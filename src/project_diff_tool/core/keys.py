"""
Serialization keys shared by the versioning engine.

Tag names are opaque identifiers: the engine only compares them.
"""


class Core:
    """Node kinds that can be tracked."""
    AUTOMATION_TRACK = "automationTrack"
    PIANO_TRACK = "pianoTrack"
    PROJECT_TIMELINE = "projectTimeline"
    PROJECT_INFO = "projectInfo"


class TrackDeltas:
    """Scalar track properties."""
    PATH = "trackPath"
    COLOUR = "trackColour"
    INSTRUMENT = "trackInstrument"
    CONTROLLER = "trackController"


class TimeSignatureDeltas:
    """Per-track time signature, introduced after the first schema."""
    TIME_SIGNATURES_CHANGED = "timeSignaturesChanged"


class AutoSequenceDeltas:
    EVENTS_ADDED = "eventsAdded"
    EVENTS_REMOVED = "eventsRemoved"
    EVENTS_CHANGED = "eventsChanged"


class PianoSequenceDeltas:
    NOTES_ADDED = "notesAdded"
    NOTES_REMOVED = "notesRemoved"
    NOTES_CHANGED = "notesChanged"


class PatternDeltas:
    CLIPS_ADDED = "clipsAdded"
    CLIPS_REMOVED = "clipsRemoved"
    CLIPS_CHANGED = "clipsChanged"


class AnnotationDeltas:
    ANNOTATIONS_ADDED = "annotationsAdded"
    ANNOTATIONS_REMOVED = "annotationsRemoved"
    ANNOTATIONS_CHANGED = "annotationsChanged"


class TimelineTimeSignatureDeltas:
    TIME_SIGNATURES_ADDED = "timeSignaturesAdded"
    TIME_SIGNATURES_REMOVED = "timeSignaturesRemoved"
    TIME_SIGNATURES_CHANGED = "timeSignaturesChangedOnTimeline"


class KeySignatureDeltas:
    KEY_SIGNATURES_ADDED = "keySignaturesAdded"
    KEY_SIGNATURES_REMOVED = "keySignaturesRemoved"
    KEY_SIGNATURES_CHANGED = "keySignaturesChanged"


class ProjectInfoDeltas:
    TITLE = "projectTitle"
    AUTHOR = "projectAuthor"
    DESCRIPTION = "projectDescription"
    LICENSE = "projectLicense"
    TEMPERAMENT = "projectTemperament"


class Records:
    """Record node tags."""
    AUTOMATION_EVENT = "autoEvent"
    NOTE = "note"
    CLIP = "clip"
    ANNOTATION = "annotation"
    TIME_SIGNATURE = "timeSignature"
    KEY_SIGNATURE = "keySignature"


class Attributes:
    """Attribute names used in payload trees."""
    ID = "id"
    BEAT = "beat"
    CURVE = "curve"
    VALUE = "value"
    KEY = "key"
    LENGTH = "len"
    VOLUME = "vol"
    MUTE = "mute"
    SOLO = "solo"
    TEXT = "text"
    COLOUR = "colour"
    NUMERATOR = "numerator"
    DENOMINATOR = "denominator"
    ROOT_KEY = "rootKey"
    SCALE = "scale"
    PATH = "path"
    INSTRUMENT_ID = "instrumentId"
    CONTROLLER = "controller"
    NAME = "name"


# Description given to deltas of a merged head state
HEAD_STATE_DELTA = "headStateDelta"
