"""
Remediation subsystem for coursecheck.

Modules:
  prompt.py    — yes/no prompters and offer_fix(), the consent gate every
                 automatic fix goes through.
  installer.py — package-manager installers (Homebrew, apt): the only
                 place install command lines are built.
"""
