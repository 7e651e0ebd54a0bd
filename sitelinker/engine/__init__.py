"""Link placement pipeline: paragraphs, anchors, selection and injection."""
