# -*- coding: utf-8 -*-
"""English translations."""

EN_TRANSLATIONS = {
    # Dialogs
    "dialog.error": "Error",
    "dialog.warning": "Warning",
    "dialog.success": "Success",
    "dialog.validation": "Validation Error",

    # Wizard
    "wizard.step_of": "Step {current} of {total}",
    "wizard.next": "Next",
    "wizard.back": "Back",
    "wizard.complete": "Complete",

    # Step titles
    "step.name_gender": "Name & Gender",
    "step.birth_location": "Birth Location",
    "step.birth_datetime": "Birth Date & Time",
    "step.review": "Review",

    # Review labels
    "review.name": "Name",
    "review.gender": "Gender",
    "review.birth_place": "Birth place",
    "review.birth_date": "Birth date",
    "review.birth_time": "Birth time",
    "review.photo": "Photo",
    "review.time_unknown": "Unknown",
    "review.photo_attached": "Attached",
    "review.photo_none": "None",

    # Validation
    "validation.first_name_required": "First name is required",
    "validation.last_name_required": "Last name is required",
    "validation.gender_required": "Gender/Sex is required",
    "validation.location_required": "Location is required",
    "validation.date_required": "Complete birth date is required",
    "validation.year_invalid": "Please enter a valid year",
    "validation.month_invalid": "Please enter a valid month (1-12)",
    "validation.day_invalid": "{month}/{year} only has {days} days",
    "validation.time_required": "Birth time is required",
    "validation.photo_type": "Please upload a JPEG, PNG, GIF, or WebP image",
    "validation.photo_size": "File size must be less than 5MB",
    "validation.photo_missing": "No image selected",

    # Pipeline errors
    "error.api.connection": "Could not reach the server. Please check your connection and try again.",
    "error.api.timeout": "The server took too long to respond. Please try again.",
    "error.location.failed": "Could not look up that place. Please select it again.",
    "error.timezone.failed": "Could not determine the time zone for the birth place. Please try again.",
    "error.subject.create_failed": "An error occurred while creating the profile. Please try again.",
    "error.credits.insufficient": "You do not have enough credits for this action.",
    "error.unexpected": "An unexpected error occurred. Please try again.",
    "error.submission.in_progress": "A submission is already in progress.",

    # Photo
    "photo.upload_failed.title": "Photo Upload Failed",
    "photo.upload_failed": "Your profile was created, but the photo failed to upload. You can add it later.",
    "photo.invalid_request": "Invalid request - please check the photo format and try again",

    # Credits
    "credits.cost": "This costs {cost} credits",
    "credits.shortfall": "Need {shortfall} more credits ({cost} required, {total} available)",
}
