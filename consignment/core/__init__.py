"""Cross-cutting helpers: settings, errors, value normalisation, query filters and joins."""
