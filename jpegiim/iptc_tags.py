# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
IPTC-NAA IIM dataset definitions

Names and descriptions of the IIM datasets, indexed by
(record number, dataset number), plus the code lists for the
File Format (1:20) and Image Type (2:130) datasets.
Based on IPTC-NAA Information Interchange Model Version 4.

Copyright 2025 DNAi inc.
"""

# Record numbers
ENVELOPE_RECORD = 1
APPLICATION_RECORD = 2
PRE_OBJECTDATA_RECORD = 7
OBJECTDATA_RECORD = 8
POST_OBJECTDATA_RECORD = 9

IPTC_RECORD_NAMES = {
    1: "Envelope Record",
    2: "Application Record",
    3: "Digital Newsphoto Parameter Record",
    4: "Not Allocated",
    5: "Not Allocated",
    6: "Abstract Relationship Record",
    7: "Pre-ObjectData Descriptor Record",
    8: "ObjectData Record",
    9: "Post-ObjectData Descriptor Record",
}

IPTC_ENTRY_NAMES = {
    # ============================================================
    # Record 1: Envelope Record
    # ============================================================
    (1, 0): "Model Version",
    (1, 5): "Destination",
    (1, 20): "File Format",
    (1, 22): "File Format Version",
    (1, 30): "Service Identifier",
    (1, 40): "Envelope Number",
    (1, 50): "Product ID",
    (1, 60): "Envelope Priority",
    (1, 70): "Date Sent",
    (1, 80): "Time Sent",
    (1, 90): "Coded Character Set",
    (1, 100): "UNO (Unique Name of Object)",
    (1, 120): "ARM Identifier",
    (1, 122): "ARM Version",

    # ============================================================
    # Record 2: Application Record
    # ============================================================
    (2, 0): "Record Version",
    (2, 3): "Object Type Reference",
    (2, 5): "Object Name (Title)",
    (2, 7): "Edit Status",
    (2, 8): "Editorial Update",
    (2, 10): "Urgency",
    (2, 12): "Subject Reference",
    (2, 15): "Category",
    (2, 20): "Supplemental Category",
    (2, 22): "Fixture Identifier",
    (2, 25): "Keywords",
    (2, 26): "Content Location Code",
    (2, 27): "Content Location Name",
    (2, 30): "Release Date",
    (2, 35): "Release Time",
    (2, 37): "Expiration Date",
    (2, 38): "Expiration Time",
    (2, 40): "Special Instructions",
    (2, 42): "Action Advised",
    (2, 45): "Reference Service",
    (2, 47): "Reference Date",
    (2, 50): "Reference Number",
    (2, 55): "Date Created",
    (2, 60): "Time Created",
    (2, 62): "Digital Creation Date",
    (2, 63): "Digital Creation Time",
    (2, 65): "Originating Program",
    (2, 70): "Program Version",
    (2, 75): "Object Cycle",
    (2, 80): "By-Line (Author)",
    (2, 85): "By-Line Title (Author Position)",
    (2, 90): "City",
    (2, 92): "Sub-Location",
    (2, 95): "Province/State",
    (2, 100): "Country/Primary Location Code",
    (2, 101): "Country/Primary Location Name",
    (2, 103): "Original Transmission Reference",
    (2, 105): "Headline",
    (2, 110): "Credit",
    (2, 115): "Source",
    (2, 116): "Copyright Notice",
    (2, 118): "Contact",
    (2, 120): "Caption/Abstract",
    (2, 122): "Caption Writer/Editor",
    (2, 125): "Rasterized Caption",
    (2, 130): "Image Type",
    (2, 131): "Image Orientation",
    (2, 135): "Language Identifier",
    (2, 150): "Audio Type",
    (2, 151): "Audio Sampling Rate",
    (2, 152): "Audio Sampling Resolution",
    (2, 153): "Audio Duration",
    (2, 154): "Audio Outcue",
    (2, 200): "ObjectData Preview File Format",
    (2, 201): "ObjectData Preview File Format Version",
    (2, 202): "ObjectData Preview Data",

    # ============================================================
    # Record 7: Pre-ObjectData Descriptor Record
    # ============================================================
    (7, 10): "Size Mode",
    (7, 20): "Max Subfile Size",
    (7, 90): "ObjectData Size Announced",
    (7, 95): "Maximum ObjectData Size",

    # ============================================================
    # Record 8: ObjectData Record
    # ============================================================
    (8, 10): "Subfile",

    # ============================================================
    # Record 9: Post-ObjectData Descriptor Record
    # ============================================================
    (9, 10): "Confirmed ObjectData Size",
}

IPTC_ENTRY_DESCRIPTIONS = {
    # Envelope Record
    (1, 0): "2 byte binary version number",
    (1, 5): "Max 1024 characters of Destination",
    (1, 20): "2 byte binary file format number, see IPTC-NAA V4 Appendix A",
    (1, 22): "Binary version number of file format",
    (1, 30): "Max 10 characters of Service Identifier",
    (1, 40): "8 Character Envelope Number",
    (1, 50): "Product ID - Max 32 characters",
    (1, 60): "Envelope Priority - 1 numeric characters",
    (1, 70): "Date Sent - 8 numeric characters CCYYMMDD",
    (1, 80): "Time Sent - 11 characters HHMMSS±HHMM",
    (1, 90): "Coded Character Set - Max 32 characters",
    (1, 100): "UNO (Unique Name of Object) - 14 to 80 characters",
    (1, 120): "ARM Identifier - 2 byte binary number",
    (1, 122): "ARM Version - 2 byte binary number",

    # Application Record
    (2, 0): "Record Version - 2 byte binary number",
    (2, 3): "Object Type Reference -  3 plus 0 to 64 Characters",
    (2, 5): "Object Name (Title) - Max 64 characters",
    (2, 7): "Edit Status - Max 64 characters",
    (2, 8): "Editorial Update - 2 numeric characters",
    (2, 10): "Urgency - 1 numeric character",
    (2, 12): "Subject Reference - 13 to 236 characters",
    (2, 15): "Category - Max 3 characters",
    (2, 20): "Supplemental Category - Max 32 characters",
    (2, 22): "Fixture Identifier - Max 32 characters",
    (2, 25): "Keywords - Max 64 characters",
    (2, 26): "Content Location Code - 3 characters",
    (2, 27): "Content Location Name - Max 64 characters",
    (2, 30): "Release Date - 8 numeric characters CCYYMMDD",
    (2, 35): "Release Time - 11 characters HHMMSS±HHMM",
    (2, 37): "Expiration Date - 8 numeric characters CCYYMMDD",
    (2, 38): "Expiration Time - 11 characters HHMMSS±HHMM",
    (2, 40): "Special Instructions - Max 256 Characters",
    (2, 42): "Action Advised - 2 numeric characters",
    (2, 45): "Reference Service - Max 10 characters",
    (2, 47): "Reference Date - 8 numeric characters CCYYMMDD",
    (2, 50): "Reference Number - 8 characters",
    (2, 55): "Date Created - 8 numeric characters CCYYMMDD",
    (2, 60): "Time Created - 11 characters HHMMSS±HHMM",
    (2, 62): "Digital Creation Date - 8 numeric characters CCYYMMDD",
    (2, 63): "Digital Creation Time - 11 characters HHMMSS±HHMM",
    (2, 65): "Originating Program - Max 32 characters",
    (2, 70): "Program Version - Max 10 characters",
    (2, 75): "Object Cycle - 1 character",
    (2, 80): "By-Line (Author) - Max 32 Characters",
    (2, 85): "By-Line Title (Author Position) - Max 32 characters",
    (2, 90): "City - Max 32 Characters",
    (2, 92): "Sub-Location - Max 32 characters",
    (2, 95): "Province/State - Max 32 Characters",
    (2, 100): "Country/Primary Location Code - 3 alphabetic characters",
    (2, 101): "Country/Primary Location Name - Max 64 characters",
    (2, 103): "Original Transmission Reference - Max 32 characters",
    (2, 105): "Headline - Max 256 Characters",
    (2, 110): "Credit - Max 32 Characters",
    (2, 115): "Source - Max 32 Characters",
    (2, 116): "Copyright Notice - Max 128 Characters",
    (2, 118): "Contact - Max 128 characters",
    (2, 120): "Caption/Abstract - Max 2000 Characters",
    (2, 122): "Caption Writer/Editor - Max 32 Characters",
    (2, 125): "Rasterized Caption - 7360 bytes, 1 bit per pixel, 460x128pixel image",
    (2, 130): "Image Type - 2 characters",
    (2, 131): "Image Orientation - 1 alphabetic character",
    (2, 135): "Language Identifier - 2 or 3 aphabetic characters",
    (2, 150): "Audio Type - 2 characters",
    (2, 151): "Audio Sampling Rate - 6 numeric characters",
    (2, 152): "Audio Sampling Resolution - 2 numeric characters",
    (2, 153): "Audio Duration - 6 numeric characters",
    (2, 154): "Audio Outcue - Max 64 characters",
    (2, 200): "ObjectData Preview File Format - 2 byte binary number",
    (2, 201): "ObjectData Preview File Format Version - 2 byte binary number",
    (2, 202): "ObjectData Preview Data - Max 256000 binary bytes",

    # Pre-ObjectData Descriptor Record
    (7, 10): "Size Mode - 1 numeric character",
    (7, 20): "Max Subfile Size",
    (7, 90): "ObjectData Size Announced",
    (7, 95): "Maximum ObjectData Size",

    # ObjectData Record
    (8, 10): "Subfile",

    # Post ObjectData Descriptor Record
    (9, 10): "Confirmed ObjectData Size",
}

# File formats for dataset 1:20, indexed by format number
IPTC_FILE_FORMATS = (
    "No ObjectData",
    "IPTC-NAA Digital Newsphoto Parameter Record",
    "IPTC7901 Recommended Message Format",
    "Tagged Image File Format (Adobe/Aldus Image data)",
    "Illustrator (Adobe Graphics data)",
    "AppleSingle (Apple Computer Inc)",
    "NAA 89-3 (ANPA 1312)",
    "MacBinary II",
    "IPTC Unstructured Character Oriented File Format (UCOFF)",
    "United Press International ANPA 1312 variant",
    "United Press International Down-Load Message",
    "JPEG File Interchange (JFIF)",
    "Photo-CD Image-Pac (Eastman Kodak)",
    "Microsoft Bit Mapped Graphics File [*.BMP]",
    "Digital Audio File [*.WAV] (Microsoft & Creative Labs)",
    "Audio plus Moving Video [*.AVI] (Microsoft)",
    "PC DOS/Windows Executable Files [*.COM][*.EXE]",
    "Compressed Binary File [*.ZIP] (PKWare Inc)",
    "Audio Interchange File Format AIFF (Apple Computer Inc)",
    "RIFF Wave (Microsoft Corporation)",
    "Freehand (Macromedia/Aldus)",
    "Hypertext Markup Language - HTML (The Internet Society)",
    "MPEG 2 Audio Layer 2 (Musicom), ISO/IEC",
    "MPEG 2 Audio Layer 3, ISO/IEC",
    "Portable Document File (*.PDF) Adobe",
    "News Industry Text Format (NITF)",
    "Tape Archive (*.TAR)",
    "Tidningarnas Telegrambyrå NITF version (TTNITF DTD)",
    "Ritzaus Bureau NITF version (RBNITF DTD)",
    "Corel Draw [*.CDR]",
)

# Colour components for dataset 2:130 (second character of the value)
IPTC_IMAGE_TYPE_NAMES = {
    "M": "Monochrome",
    "Y": "Yellow Component",
    "A": "Magenta Component",
    "C": "Cyan Component",
    "K": "Black Component",
    "R": "Red Component",
    "G": "Green Component",
    "B": "Blue Component",
    "T": "Text Only",
    "F": "Full colour composite, frame sequential",
    "L": "Full colour composite, line sequential",
    "P": "Full colour composite, pixel sequential",
    "S": "Full colour composite, special interleaving",
}
